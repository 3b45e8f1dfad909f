from typing import Optional

from faker import Faker

from app.schema.waitlist import WaitlistRegistration, WaitlistRegistrationCreate
from app.storage import Storage

PERSONAS = ["parent", "coach", "player", "club"]


def waitlist_payload(fake: Faker, **overrides) -> dict:
    """Camel-cased request body for POST /api/waitlist."""
    payload = {"fullName": fake.name(), "email": fake.unique.email(), "persona": "parent"}
    payload.update(overrides)
    return payload


def contact_payload(fake: Faker, **overrides) -> dict:
    """Camel-cased request body for POST /api/contact."""
    payload = {
        "name": fake.name(),
        "email": fake.unique.email(),
        "subject": "Question about early access",
        "message": fake.paragraph(nb_sentences=3),
    }
    payload.update(overrides)
    return payload


async def populate_waitlist(
    storage: Storage, num_registrations: int, fake: Optional[Faker] = None
) -> list[WaitlistRegistration]:
    """Fill the waitlist of any storage backend with fake registrations."""
    fake = fake or Faker()
    registrations = []
    for i in range(num_registrations):
        data = WaitlistRegistrationCreate(
            full_name=fake.name(),
            email=fake.unique.email(),
            persona=PERSONAS[i % len(PERSONAS)],
        )
        registrations.append(await storage.create_waitlist_registration(data))
    return registrations

