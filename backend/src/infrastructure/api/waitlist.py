import logging
from typing import Any

from fastapi import APIRouter, Body, status

from app.exceptions import ApiException, InternalError
from app.schema.validation import parse_waitlist_registration
from app.schema.waitlist import WaitlistCount, WaitlistJoined, WaitlistRegistrationSummary
from infrastructure.api.dependencies import waitlist_service_dep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["waitlist"])


@router.post("/waitlist", status_code=status.HTTP_201_CREATED, response_model=WaitlistJoined)
async def join_waitlist(
    waitlist_service: waitlist_service_dep,
    payload: Any = Body(default=None),
):
    data = parse_waitlist_registration(payload)
    try:
        registration = await waitlist_service.join_waitlist(data)
    except ApiException:
        raise
    except Exception:
        logger.exception("Error creating waitlist registration")
        raise InternalError("Failed to join waitlist. Please try again.")

    return WaitlistJoined(
        message="Successfully joined the waitlist!",
        registration=WaitlistRegistrationSummary.model_validate(registration.model_dump()),
    )


@router.get("/waitlist/count", response_model=WaitlistCount)
async def get_waitlist_count(waitlist_service: waitlist_service_dep):
    try:
        count = await waitlist_service.get_count()
    except Exception:
        logger.exception("Error getting waitlist count")
        raise InternalError("Failed to get waitlist count")
    return WaitlistCount(count=count)
