import logging
from typing import TYPE_CHECKING

from app.schema.contact import ContactSubmission, ContactSubmissionCreate

if TYPE_CHECKING:
    from app.storage import Storage

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, storage: "Storage"):
        self.storage = storage

    async def submit(self, data: ContactSubmissionCreate) -> ContactSubmission:
        submission = await self.storage.create_contact_submission(data)
        logger.info("Contact submission %s stored", submission.id)
        return submission


def build_contact_service(storage: "Storage") -> ContactService:
    return ContactService(storage)
