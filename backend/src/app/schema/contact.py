from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.schema.fields import (
    MESSAGE_MIN_LENGTH,
    NAME_MIN_LENGTH,
    SUBJECT_MIN_LENGTH,
    CamelModel,
    has_min_length,
    is_valid_email,
)


class ContactSubmissionCreate(CamelModel):
    name: str
    email: str
    subject: str
    message: str

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        if not has_min_length(v, NAME_MIN_LENGTH):
            raise ValueError(f"Name must be at least {NAME_MIN_LENGTH} characters")
        return v

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("subject")
    @classmethod
    def subject_length(cls, v: str) -> str:
        if not has_min_length(v, SUBJECT_MIN_LENGTH):
            raise ValueError(f"Subject must be at least {SUBJECT_MIN_LENGTH} characters")
        return v

    @field_validator("message")
    @classmethod
    def message_length(cls, v: str) -> str:
        if not has_min_length(v, MESSAGE_MIN_LENGTH):
            raise ValueError(f"Message must be at least {MESSAGE_MIN_LENGTH} characters")
        return v


class ContactSubmission(CamelModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactSent(BaseModel):
    message: str
    submission: ContactSubmission
