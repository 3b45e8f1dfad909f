import logging
from typing import Any

from fastapi import APIRouter, Body, status

from app.exceptions import ApiException, InternalError
from app.schema.contact import ContactSent
from app.schema.validation import parse_contact_submission
from infrastructure.api.dependencies import contact_service_dep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])


@router.post("/contact", status_code=status.HTTP_201_CREATED, response_model=ContactSent)
async def send_contact_message(
    contact_service: contact_service_dep,
    payload: Any = Body(default=None),
):
    data = parse_contact_submission(payload)
    try:
        submission = await contact_service.submit(data)
    except ApiException:
        raise
    except Exception:
        logger.exception("Error creating contact submission")
        raise InternalError("Failed to send message. Please try again.")

    return ContactSent(
        message="Thank you for your message! We'll get back to you soon.",
        submission=submission,
    )
