import os

# "airtable" or "database"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "airtable").strip().lower()
# Fail the count endpoint instead of answering 0 when Airtable is unreachable
WAITLIST_COUNT_STRICT = os.getenv("WAITLIST_COUNT_STRICT", "false").lower() in ("1", "true", "yes")
