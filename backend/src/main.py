import logging
import os
from pathlib import Path

# Load .env from the project root (next to backend/)
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv  # noqa: E402
    load_dotenv(_env_path)

from fastapi.responses import RedirectResponse  # noqa: E402
from infrastructure.application import create_app  # noqa: E402
from settings.config import load_config  # noqa: E402

logging.basicConfig(
    format="%(asctime)s %(levelname)s: %(message)s",
    level=logging.INFO,
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

config = load_config()
app = create_app(config)


@app.get("/")
def root():
    """Redirect the bare root to /api/health."""
    return RedirectResponse(url="/api/health", status_code=302)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
