import logging
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions import ApiException, ValidationError

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (e.g. broken JSON) get the same 400 shape as schema failures."""
    errors = [
        {"field": ".".join(str(part) for part in error["loc"][1:]) or None, "message": error["msg"]}
        for error in exc.errors()
    ]
    return await api_exception_handler(request, ValidationError(errors))


def register_exception_handlers(app: "FastAPI"):
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
