import os

FRONTEND_URL = os.getenv("FRONTEND_URL", "")
# Comma-separated list of extra allowed origins
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")
