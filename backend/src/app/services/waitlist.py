import logging
from typing import TYPE_CHECKING

from app.exceptions import ConflictError, Duplicate, Missing
from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate

if TYPE_CHECKING:
    from app.storage import Storage

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "This email is already registered for the waitlist."


class EmailAlreadyRegisteredError(ConflictError):
    pass


class WaitlistService:
    def __init__(self, storage: "Storage"):
        self.storage = storage

    async def join_waitlist(self, data: WaitlistRegistrationCreate) -> WaitlistRegistration:
        """Create a new waitlist entry, or raise if the email is already registered.

        The lookup and insert are serialised per process; concurrent requests
        served by separate processes can still both pass the lookup.
        """
        async with self.storage.registration_lock:
            try:
                await self.storage.get_waitlist_registration_by_email(data.email)
                raise EmailAlreadyRegisteredError(ALREADY_REGISTERED)
            except Missing:
                pass

            try:
                registration = await self.storage.create_waitlist_registration(data)
            except Duplicate:
                raise EmailAlreadyRegisteredError(ALREADY_REGISTERED)

        logger.info("Waitlist registration %s created", registration.id)
        return registration

    async def get_count(self) -> int:
        return await self.storage.get_waitlist_count()


def build_waitlist_service(storage: "Storage") -> WaitlistService:
    return WaitlistService(storage)
