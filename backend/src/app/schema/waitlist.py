from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.schema.fields import CamelModel, is_blank, is_valid_email, normalize_email


class WaitlistRegistrationCreate(CamelModel):
    full_name: str
    email: str
    persona: str

    @field_validator("full_name")
    @classmethod
    def full_name_required(cls, v: str) -> str:
        if is_blank(v):
            raise ValueError("Full name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        v = normalize_email(v)
        if not v:
            raise ValueError("Email address is required")
        if not is_valid_email(v):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("persona")
    @classmethod
    def persona_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Persona is required")
        return v


class WaitlistRegistration(CamelModel):
    id: str
    full_name: str
    email: str
    persona: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WaitlistRegistrationSummary(CamelModel):
    id: str
    full_name: str
    email: str


class WaitlistJoined(BaseModel):
    message: str
    registration: WaitlistRegistrationSummary


class WaitlistCount(BaseModel):
    count: int
