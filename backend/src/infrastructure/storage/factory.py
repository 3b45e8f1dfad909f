import logging
from typing import TYPE_CHECKING

from app.exceptions import ConfigurationError
from infrastructure.airtable import AirtableClient
from infrastructure.database import Database
from infrastructure.repository.external_store import build_external_store_client
from infrastructure.storage.external import ExternalTableStorage
from infrastructure.storage.relational import RelationalStorage
from settings.config import StorageBackend

if TYPE_CHECKING:
    from app.storage import Storage
    from settings.config import AppConfig

logger = logging.getLogger(__name__)


def build_storage(config: "AppConfig") -> "Storage":
    """Select the storage backend once, at process startup."""
    database = (
        Database(config.database_url, echo=config.sqlalchemy_echo)
        if config.database_url
        else None
    )

    if config.storage_backend == StorageBackend.database:
        if database is None:
            raise ConfigurationError("STORAGE_BACKEND=database requires DATABASE_URL or POSTGRES_* variables")
        storage = RelationalStorage(database)
    else:
        if not config.has_airtable_credentials:
            raise ConfigurationError("STORAGE_BACKEND=airtable requires AIRTABLE_API_KEY and AIRTABLE_BASE_ID")
        airtable = AirtableClient(
            api_key=config.airtable_api_key,
            base_id=config.airtable_base_id,
            api_url=config.airtable_api_url,
            timeout=config.airtable_timeout,
        )
        store = build_external_store_client(airtable, strict_count=config.waitlist_count_strict)
        storage = ExternalTableStorage(store, db=database)

    logger.info("Using storage type: %s", type(storage).__name__)
    return storage
