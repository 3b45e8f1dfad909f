import time
import json
import logging
from typing import Optional, Any
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


EXCLUDE_PATH: list[str] = ["/api/health", "/docs", "/openapi.json"]
SENSITIVE_KEYS = {"password", "secret", "token", "key", "auth", "authorization", "cookie"}
# visitor details sent by the waitlist and contact forms
PERSONAL_KEYS = {"email", "fullname", "name", "message"}
MASKED_KEYS = SENSITIVE_KEYS | PERSONAL_KEYS


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        exclude_paths: Optional[list[str]] = None,
        max_body_length: int = 200,
    ):
        super().__init__(app)
        self.exclude_paths = exclude_paths or EXCLUDE_PATH
        self.max_body_length = max_body_length

    async def dispatch(self, request: Request, call_next):
        if any(request.url.path.startswith(excluded) for excluded in self.exclude_paths):
            return await call_next(request)

        start_time = time.time()
        request_body = await self._get_request_body(request)
        request_data = {
            "method": request.method,
            "path": request.url.path,
            "body": self._truncate(self._sanitize_body(request_body)),
        }
        logger.info(f"Request: {json.dumps(request_data, default=str)}")

        response = await call_next(request)

        response_data = {
            "status_code": response.status_code,
            "duration": round(time.time() - start_time, 4),
        }
        logger.info(f"Response: {json.dumps(response_data, default=str)}")
        return response

    async def _get_request_body(self, request: Request) -> Optional[str]:
        """Safely extract and decode request body."""
        try:
            body = await request.body()
            return body.decode("utf-8") if body else None
        except UnicodeDecodeError:
            logger.warning("<LoggingMiddleware> Request body could not be decoded as UTF-8")
            return "<non-utf8-body>"

    def _truncate(self, value: Any) -> Any:
        if isinstance(value, str) and len(value) > self.max_body_length:
            return f"{value[: self.max_body_length]}..."
        return value

    def _sanitize_body(self, body: Optional[str]) -> Optional[Any]:
        """Sanitize sensitive data in the body."""
        if not body or body == "<non-utf8-body>":
            return body
        try:
            return self._sanitize_dict(json.loads(body))
        except json.JSONDecodeError:
            return body

    def _sanitize_dict(self, data: Any) -> Any:
        """Recursively mask sensitive keys."""
        if isinstance(data, dict):
            return {
                k: "****" if k.lower() in MASKED_KEYS else self._sanitize_dict(v)
                for k, v in data.items()
            }
        elif isinstance(data, list):
            return [self._sanitize_dict(item) for item in data]
        return data
