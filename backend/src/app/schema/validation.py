from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError
from app.schema.contact import ContactSubmissionCreate
from app.schema.fields import CamelModel
from app.schema.waitlist import WaitlistRegistrationCreate

ModelT = TypeVar("ModelT", bound=CamelModel)

FIELD_LABELS = {
    "fullName": "Full name",
    "email": "Email address",
    "persona": "Persona",
    "name": "Name",
    "subject": "Subject",
    "message": "Message",
}


def _field_errors(exc: PydanticValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or None
        if error["type"] == "value_error":
            message = str(error["ctx"]["error"])
        elif error["type"] == "missing":
            message = f"{FIELD_LABELS.get(field, field)} is required"
        elif error["type"] in ("model_type", "model_attributes_type"):
            message = "Request body must be a JSON object"
        else:
            message = error["msg"]
        errors.append({"field": field, "message": message})
    return errors


def _parse(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc))


def parse_waitlist_registration(data: Any) -> WaitlistRegistrationCreate:
    """Validate and normalize a raw waitlist payload, or raise ValidationError."""
    return _parse(WaitlistRegistrationCreate, data)


def parse_contact_submission(data: Any) -> ContactSubmissionCreate:
    """Validate a raw contact payload, or raise ValidationError."""
    return _parse(ContactSubmissionCreate, data)
