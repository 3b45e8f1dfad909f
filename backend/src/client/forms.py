"""Submission state for the waitlist and contact forms.

Local validation only gates the submit action. The server validates again
and its answer is what counts.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from app.schema.fields import (
    MESSAGE_MIN_LENGTH,
    NAME_MIN_LENGTH,
    SUBJECT_MIN_LENGTH,
    has_min_length,
    is_blank,
    is_valid_email,
)
from client.api import ApiRequestError

if TYPE_CHECKING:
    from client.api import ChirpinApiClient

logger = logging.getLogger(__name__)

CONFIRMATION_SECONDS = 3.0
DEFAULT_PERSONA = "parent"


class FormState(str, Enum):
    idle = "idle"
    submitting = "submitting"
    submitted = "submitted"
    error = "error"


class EmailFieldState(str, Enum):
    idle = "idle"
    valid = "valid"
    invalid = "invalid"


def email_field_state(email: str) -> EmailFieldState:
    """Live feedback for the email input: nothing typed yet, valid or invalid."""
    if is_blank(email):
        return EmailFieldState.idle
    return EmailFieldState.valid if is_valid_email(email.strip()) else EmailFieldState.invalid


class SubmissionForm(ABC):
    def __init__(self, api: "ChirpinApiClient", confirmation_seconds: float = CONFIRMATION_SECONDS):
        self.api = api
        self.confirmation_seconds = confirmation_seconds
        self.state = FormState.idle
        self.error: Optional[str] = None
        self.field_errors: list = []
        self.response: Optional[dict[str, Any]] = None
        self._reset_task: Optional[asyncio.Task] = None

    @property
    @abstractmethod
    def is_valid(self) -> bool: ...

    @property
    def can_submit(self) -> bool:
        return self.is_valid and self.state != FormState.submitting

    @abstractmethod
    def clear(self): ...

    @abstractmethod
    async def _send(self) -> dict[str, Any]: ...

    async def submit(self) -> bool:
        """Send the form. Returns False when it is not ready or the request failed."""
        if not self.can_submit:
            return False

        self.state = FormState.submitting
        self.error = None
        self.field_errors = []
        try:
            self.response = await self._send()
        except ApiRequestError as e:
            logger.info("Form submission failed: %s", e.message)
            # inputs stay as typed so the visitor can fix and resend
            self.state = FormState.error
            self.error = e.message
            self.field_errors = e.errors
            return False

        self.state = FormState.submitted
        self.clear()
        self._reset_task = asyncio.create_task(self._end_confirmation())
        return True

    async def _end_confirmation(self):
        await asyncio.sleep(self.confirmation_seconds)
        if self.state == FormState.submitted:
            self.state = FormState.idle

    async def wait_until_idle(self):
        if self._reset_task is not None:
            await self._reset_task


class WaitlistForm(SubmissionForm):
    def __init__(self, api: "ChirpinApiClient", confirmation_seconds: float = CONFIRMATION_SECONDS):
        super().__init__(api, confirmation_seconds)
        self.full_name = ""
        self.email = ""
        self.persona = DEFAULT_PERSONA

    @property
    def email_state(self) -> EmailFieldState:
        return email_field_state(self.email)

    @property
    def is_valid(self) -> bool:
        return (
            self.email_state == EmailFieldState.valid
            and not is_blank(self.full_name)
            and bool(self.persona)
        )

    def clear(self):
        self.full_name = ""
        self.email = ""

    async def _send(self) -> dict[str, Any]:
        return await self.api.join_waitlist(self.full_name, self.email, self.persona)


class ContactForm(SubmissionForm):
    def __init__(self, api: "ChirpinApiClient", confirmation_seconds: float = CONFIRMATION_SECONDS):
        super().__init__(api, confirmation_seconds)
        self.name = ""
        self.email = ""
        self.subject = ""
        self.message = ""

    @property
    def is_valid(self) -> bool:
        return (
            has_min_length(self.name, NAME_MIN_LENGTH)
            and is_valid_email(self.email)
            and has_min_length(self.subject, SUBJECT_MIN_LENGTH)
            and has_min_length(self.message, MESSAGE_MIN_LENGTH)
        )

    def clear(self):
        self.name = ""
        self.email = ""
        self.subject = ""
        self.message = ""

    async def _send(self) -> dict[str, Any]:
        return await self.api.send_contact_message(self.name, self.email, self.subject, self.message)
