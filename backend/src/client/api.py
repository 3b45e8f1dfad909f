import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiRequestError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class ChirpinApiClient:
    """Calls the waitlist and contact endpoints the way the site forms do."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 30.0):
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport, timeout=timeout)

    async def _request(self, method: str, path: str, fallback_message: str, **kwargs) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request %s %s failed: %s", method, path, e)
            raise ApiRequestError(fallback_message)

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if resp.is_error:
            raise ApiRequestError(
                body.get("message") or fallback_message,
                status_code=resp.status_code,
                errors=body.get("errors"),
            )
        return body

    async def join_waitlist(self, full_name: str, email: str, persona: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/api/waitlist",
            "Failed to join waitlist. Please try again.",
            json={"fullName": full_name, "email": email, "persona": persona},
        )

    async def get_waitlist_count(self) -> int:
        body = await self._request("GET", "/api/waitlist/count", "Failed to get waitlist count")
        return int(body["count"])

    async def send_contact_message(self, name: str, email: str, subject: str, message: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/api/contact",
            "Failed to send message. Please try again.",
            json={"name": name, "email": email, "subject": subject, "message": message},
        )

    async def close(self):
        await self._client.aclose()
