import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from app.exceptions import Missing, StoreError
from app.schema.contact import ContactSubmission, ContactSubmissionCreate
from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate
from infrastructure.airtable import escape_formula_string

if TYPE_CHECKING:
    from infrastructure.airtable import AirtableClient

logger = logging.getLogger(__name__)

WAITLIST_TABLE = "Waitlist"
CONTACT_TABLE = "Contact"

WAITLIST_FIELDS = {
    "full_name": "Full Name",
    "email": "Email",
}
CONTACT_FIELDS = {
    "name": "Name",
    "email": "Email",
    "subject": "Subject",
    "message": "Message",
}


def _created_at(record: dict[str, Any], fallback: datetime) -> datetime:
    # An explicit "Created At" column wins over Airtable's own createdTime
    value = record.get("fields", {}).get("Created At") or record.get("createdTime")
    if not value:
        return fallback
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ExternalStoreClient:
    """Maps waitlist and contact records onto one Airtable table each."""

    def __init__(self, airtable: "AirtableClient", strict_count: bool = False):
        self.airtable = airtable
        self.strict_count = strict_count

    async def create_waitlist_registration(self, data: WaitlistRegistrationCreate) -> WaitlistRegistration:
        captured_at = datetime.now(timezone.utc)
        fields = {column: getattr(data, attr) for attr, column in WAITLIST_FIELDS.items()}
        [record] = await self.airtable.create_records(WAITLIST_TABLE, [fields])
        logger.info("Created waitlist record %s", record["id"])
        return WaitlistRegistration(
            id=record["id"],
            full_name=data.full_name,
            email=data.email,
            persona=data.persona,
            created_at=_created_at(record, captured_at),
        )

    async def create_contact_submission(self, data: ContactSubmissionCreate) -> ContactSubmission:
        captured_at = datetime.now(timezone.utc)
        fields = {column: getattr(data, attr) for attr, column in CONTACT_FIELDS.items()}
        [record] = await self.airtable.create_records(CONTACT_TABLE, [fields])
        logger.info("Created contact record %s", record["id"])
        return ContactSubmission(
            id=record["id"],
            **data.model_dump(),
            created_at=_created_at(record, captured_at),
        )

    async def get_waitlist_count(self) -> int:
        """Count waitlist rows by fetching only their Email field.

        This reads the whole table, so it only stays cheap while the waitlist is small.
        Unless strict_count is set, a store failure is reported as 0.
        """
        try:
            records = await self.airtable.list_records(WAITLIST_TABLE, fields=[WAITLIST_FIELDS["email"]])
        except StoreError as e:
            if self.strict_count:
                raise
            logger.warning("Waitlist count unavailable, reporting 0: %s", e)
            return 0
        return len(records)

    async def get_waitlist_registration_by_email(self, email: str) -> WaitlistRegistration:
        formula = f'{{{WAITLIST_FIELDS["email"]}}} = "{escape_formula_string(email)}"'
        records = await self.airtable.list_records(WAITLIST_TABLE, filter_by_formula=formula, max_records=1)
        if not records:
            raise Missing(f"No waitlist entry found for email: {email}")

        record = records[0]
        fields = record.get("fields", {})
        return WaitlistRegistration(
            id=record["id"],
            full_name=fields.get(WAITLIST_FIELDS["full_name"], ""),
            email=fields.get(WAITLIST_FIELDS["email"], email),
            persona=fields.get("Persona"),
            created_at=_created_at(record, datetime.now(timezone.utc)),
        )

    async def close(self):
        await self.airtable.close()


def build_external_store_client(airtable: "AirtableClient", strict_count: bool = False) -> ExternalStoreClient:
    return ExternalStoreClient(airtable, strict_count=strict_count)
