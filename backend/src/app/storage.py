import asyncio
from abc import ABC, abstractmethod

from app.schema.contact import ContactSubmission, ContactSubmissionCreate
from app.schema.user import User, UserCreate
from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate


class Storage(ABC):
    """Persistence capability shared by the relational and Airtable backends.

    One instance is selected at startup and shared by every request. Lookups
    raise ``Missing`` when nothing matches.
    """

    def __init__(self):
        # Serialises the waitlist check-then-insert within this process only.
        self.registration_lock = asyncio.Lock()

    async def startup(self):
        pass

    async def close(self):
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    async def create_waitlist_registration(self, data: WaitlistRegistrationCreate) -> WaitlistRegistration: ...

    @abstractmethod
    async def get_waitlist_registration_by_email(self, email: str) -> WaitlistRegistration: ...

    @abstractmethod
    async def get_waitlist_count(self) -> int: ...

    @abstractmethod
    async def create_contact_submission(self, data: ContactSubmissionCreate) -> ContactSubmission: ...
