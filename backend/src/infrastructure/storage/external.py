import logging
from typing import TYPE_CHECKING, Optional

from app.exceptions import ConfigurationError
from app.schema.contact import ContactSubmission, ContactSubmissionCreate
from app.schema.user import User, UserCreate
from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate
from app.storage import Storage
from infrastructure.storage.relational import RelationalStorage

if TYPE_CHECKING:
    from infrastructure.database import Database
    from infrastructure.repository.external_store import ExternalStoreClient

logger = logging.getLogger(__name__)


class ExternalTableStorage(Storage):
    """Waitlist and contact rows live in Airtable; users stay in the database when one is configured."""

    def __init__(self, store: "ExternalStoreClient", db: Optional["Database"] = None):
        super().__init__()
        self.store = store
        self._users = RelationalStorage(db) if db is not None else None

    def _user_storage(self) -> RelationalStorage:
        if self._users is None:
            raise ConfigurationError("User storage requires a configured database")
        return self._users

    async def startup(self):
        if self._users is not None:
            await self._users.startup()

    async def close(self):
        await self.store.close()
        if self._users is not None:
            await self._users.close()

    async def get_user(self, user_id: str) -> User:
        return await self._user_storage().get_user(user_id)

    async def get_user_by_username(self, username: str) -> User:
        return await self._user_storage().get_user_by_username(username)

    async def create_user(self, data: UserCreate) -> User:
        return await self._user_storage().create_user(data)

    async def create_waitlist_registration(self, data: WaitlistRegistrationCreate) -> WaitlistRegistration:
        return await self.store.create_waitlist_registration(data)

    async def get_waitlist_registration_by_email(self, email: str) -> WaitlistRegistration:
        return await self.store.get_waitlist_registration_by_email(email)

    async def get_waitlist_count(self) -> int:
        return await self.store.get_waitlist_count()

    async def create_contact_submission(self, data: ContactSubmissionCreate) -> ContactSubmission:
        return await self.store.create_contact_submission(data)
