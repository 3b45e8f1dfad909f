from typing import TYPE_CHECKING

from app.orm.contact import ContactSubmissionORM
from app.schema.contact import ContactSubmission, ContactSubmissionCreate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class ContactRepository:
    def __init__(self, db: "AsyncSession"):
        self.db = db

    async def create(self, data: ContactSubmissionCreate) -> ContactSubmission:
        new_entry = ContactSubmissionORM(**data.model_dump())
        async with self.db.begin():
            self.db.add(new_entry)
        await self.db.refresh(new_entry)
        return ContactSubmission.model_validate(new_entry)


def build_contact_repository(db: "AsyncSession") -> ContactRepository:
    return ContactRepository(db)
