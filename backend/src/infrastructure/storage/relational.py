import logging
from typing import TYPE_CHECKING

from app.schema.contact import ContactSubmission, ContactSubmissionCreate
from app.schema.user import User, UserCreate
from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate
from app.storage import Storage
from infrastructure.repository.contact import build_contact_repository
from infrastructure.repository.user import build_user_repository
from infrastructure.repository.waitlist import build_waitlist_repository

if TYPE_CHECKING:
    from infrastructure.database import Database

logger = logging.getLogger(__name__)


class RelationalStorage(Storage):
    """Storage backed by SQLAlchemy, one session per operation."""

    def __init__(self, db: "Database"):
        super().__init__()
        self.db = db

    async def startup(self):
        await self.db.check_connection()
        await self.db.create_tables()

    async def close(self):
        await self.db.dispose()

    async def get_user(self, user_id: str) -> User:
        async with self.db.session() as session:
            return await build_user_repository(session).get(user_id)

    async def get_user_by_username(self, username: str) -> User:
        async with self.db.session() as session:
            return await build_user_repository(session).get_by_username(username)

    async def create_user(self, data: UserCreate) -> User:
        async with self.db.session() as session:
            return await build_user_repository(session).create_user(data)

    async def create_waitlist_registration(self, data: WaitlistRegistrationCreate) -> WaitlistRegistration:
        async with self.db.session() as session:
            return await build_waitlist_repository(session).create(data)

    async def get_waitlist_registration_by_email(self, email: str) -> WaitlistRegistration:
        async with self.db.session() as session:
            return await build_waitlist_repository(session).get_by_email(email)

    async def get_waitlist_count(self) -> int:
        async with self.db.session() as session:
            return await build_waitlist_repository(session).count()

    async def create_contact_submission(self, data: ContactSubmissionCreate) -> ContactSubmission:
        async with self.db.session() as session:
            return await build_contact_repository(session).create(data)
