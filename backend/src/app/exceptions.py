from typing import Optional

from fastapi import status


class ApiException(Exception):
    status_code: int
    detail: str

    def __init__(self, msg: str):
        self.detail = msg
        super().__init__(msg)

    def to_content(self) -> dict:
        return {"message": self.detail}


class Missing(ApiException):
    status_code = status.HTTP_404_NOT_FOUND


class Duplicate(ApiException):
    status_code = status.HTTP_409_CONFLICT


class ValidationError(ApiException):
    """Input failed schema constraints. Carries every field error, not just the first."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict], msg: str = "Invalid input data"):
        super().__init__(msg)
        self.errors = errors

    def to_content(self) -> dict:
        return {"message": self.detail, "errors": self.errors}


class ConflictError(ApiException):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(ApiException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ConfigurationError(ApiException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreError(Exception):
    """Network, auth or quota failure reported by a backing store."""

    def __init__(self, msg: str, status_code: Optional[int] = None):
        super().__init__(msg)
        self.status_code = status_code
