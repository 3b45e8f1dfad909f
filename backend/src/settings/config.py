from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.exceptions import ConfigurationError
from settings import airtable, cors, pg, sql_alchemy, storage


class StorageBackend(str, Enum):
    database = "database"
    airtable = "airtable"


class AppConfig(BaseModel):
    """Process-wide configuration, built once at startup and never mutated."""

    storage_backend: StorageBackend = StorageBackend.airtable
    database_url: Optional[str] = None
    sqlalchemy_echo: bool = False
    airtable_api_key: Optional[str] = None
    airtable_base_id: Optional[str] = None
    airtable_api_url: str = "https://api.airtable.com/v0"
    airtable_timeout: float = 30.0
    waitlist_count_strict: bool = False
    cors_origins: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def has_airtable_credentials(self) -> bool:
        return bool(self.airtable_api_key and self.airtable_base_id)


def _database_url() -> Optional[str]:
    if pg.DATABASE_URL:
        return pg.DATABASE_URL
    if not all([pg.POSTGRES_USER, pg.POSTGRES_PASSWORD, pg.POSTGRES_HOST, pg.POSTGRES_DB]):
        return None
    return (
        f"postgresql+asyncpg://{pg.POSTGRES_USER}:{pg.POSTGRES_PASSWORD}"
        f"@{pg.POSTGRES_HOST}:{pg.POSTGRES_PORT}/{pg.POSTGRES_DB}"
    )


def _storage_backend() -> StorageBackend:
    try:
        return StorageBackend(storage.STORAGE_BACKEND)
    except ValueError:
        allowed = ", ".join(b.value for b in StorageBackend)
        raise ConfigurationError(
            f"Unknown STORAGE_BACKEND {storage.STORAGE_BACKEND!r}, expected one of: {allowed}"
        )


def _cors_origins() -> tuple[str, ...]:
    origins: list[str] = []
    for origin in [cors.FRONTEND_URL, *cors.CORS_ORIGINS.split(",")]:
        origin = origin.strip().rstrip("/")
        if origin and origin not in origins:
            origins.append(origin)
    return tuple(origins)


def load_config() -> AppConfig:
    """Build the AppConfig from environment-backed settings modules."""
    return AppConfig(
        storage_backend=_storage_backend(),
        database_url=_database_url(),
        sqlalchemy_echo=sql_alchemy.SQLALCHEMY_ECHO,
        airtable_api_key=airtable.AIRTABLE_API_KEY.strip() or None,
        airtable_base_id=airtable.AIRTABLE_BASE_ID.strip() or None,
        airtable_api_url=airtable.AIRTABLE_API_URL,
        airtable_timeout=airtable.AIRTABLE_TIMEOUT,
        waitlist_count_strict=storage.WAITLIST_COUNT_STRICT,
        cors_origins=_cors_origins(),
    )
