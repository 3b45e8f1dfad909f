import pydantic
import pytest

from app.exceptions import ConfigurationError
from app.schema.user import UserCreate
from infrastructure.storage.external import ExternalTableStorage
from infrastructure.storage.factory import build_storage
from infrastructure.storage.relational import RelationalStorage
from settings import cors
from settings import storage as storage_settings
from settings.config import AppConfig, StorageBackend, load_config


@pytest.mark.asyncio
async def test_airtable_backend_is_selected():
    storage = build_storage(AppConfig(airtable_api_key="key", airtable_base_id="appBase"))

    assert isinstance(storage, ExternalTableStorage)
    await storage.close()


@pytest.mark.asyncio
async def test_database_backend_is_selected(tmp_path):
    config = AppConfig(
        storage_backend=StorageBackend.database,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'factory.db'}",
    )

    storage = build_storage(config)

    assert isinstance(storage, RelationalStorage)
    await storage.close()


def test_airtable_backend_requires_credentials():
    with pytest.raises(ConfigurationError):
        build_storage(AppConfig(airtable_api_key="key"))


def test_database_backend_requires_url():
    with pytest.raises(ConfigurationError):
        build_storage(AppConfig(storage_backend=StorageBackend.database))


def test_config_is_immutable():
    config = AppConfig(airtable_api_key="key", airtable_base_id="appBase")

    with pytest.raises(pydantic.ValidationError):
        config.storage_backend = StorageBackend.database


@pytest.mark.asyncio
async def test_airtable_storage_without_database_rejects_user_operations(airtable_storage):
    with pytest.raises(ConfigurationError):
        await airtable_storage.create_user(UserCreate(username="admin", password="secret"))


@pytest.mark.asyncio
async def test_airtable_storage_keeps_users_in_database(external_store, database):
    storage = ExternalTableStorage(external_store, db=database)
    await storage.startup()

    user = await storage.create_user(UserCreate(username="admin", password="secret"))

    assert (await storage.get_user(user.id)).username == "admin"


def test_unknown_storage_backend_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(storage_settings, "STORAGE_BACKEND", "spreadsheet")

    with pytest.raises(ConfigurationError) as exc_info:
        load_config()

    assert "airtable" in exc_info.value.detail
    assert "database" in exc_info.value.detail


def test_cors_origins_are_loaded_into_config(monkeypatch):
    monkeypatch.setattr(storage_settings, "STORAGE_BACKEND", "airtable")
    monkeypatch.setattr(cors, "FRONTEND_URL", "https://chirpin.app/")
    monkeypatch.setattr(cors, "CORS_ORIGINS", " https://www.chirpin.app, https://chirpin.app ,")

    config = load_config()

    assert config.cors_origins == ("https://chirpin.app", "https://www.chirpin.app")
