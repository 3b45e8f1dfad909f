"""Field rules shared by the API schemas and the client forms."""
import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MIN_LENGTH = 2
SUBJECT_MIN_LENGTH = 5
MESSAGE_MIN_LENGTH = 10


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def normalize_email(value: str) -> str:
    return value.strip().lower()


def has_min_length(value: str, min_length: int) -> bool:
    return len(value) >= min_length


def is_blank(value: str) -> bool:
    return not value.strip()
