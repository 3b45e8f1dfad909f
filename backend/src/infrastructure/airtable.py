import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from app.exceptions import StoreError

logger = logging.getLogger(__name__)

AIRTABLE_API_URL = "https://api.airtable.com/v0"
# Airtable caps pageSize at 100
PAGE_SIZE = 100


def escape_formula_string(value: str) -> str:
    """Escape a value for use inside a double-quoted formula string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


class AirtableClient:
    """Thin async wrapper around the Airtable REST API for a single base."""

    def __init__(
        self,
        api_key: str,
        base_id: str,
        api_url: str = AIRTABLE_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_id = base_id
        self._client = httpx.AsyncClient(
            base_url=f"{api_url.rstrip('/')}/{base_id}",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def _request(self, method: str, table: str, **kwargs) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, f"/{quote(table)}", **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Airtable API error on %s %s: %s %s",
                method, table, e.response.status_code, e.response.text,
            )
            raise StoreError(
                f"Airtable request failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            )
        except httpx.HTTPError as e:
            logger.error("Airtable request %s %s failed: %s", method, table, e)
            raise StoreError(f"Airtable request failed: {e}")
        return resp.json()

    async def create_records(self, table: str, fields_list: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Create rows and return them as Airtable echoes them (id, createdTime, fields)."""
        payload = {"records": [{"fields": fields} for fields in fields_list]}
        data = await self._request("POST", table, json=payload)
        return data.get("records", [])

    async def list_records(
        self,
        table: str,
        fields: Optional[list[str]] = None,
        filter_by_formula: Optional[str] = None,
        max_records: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Fetch every matching row, following the offset cursor across pages."""
        params: list[tuple[str, str]] = [("pageSize", str(PAGE_SIZE))]
        for field in fields or []:
            params.append(("fields[]", field))
        if filter_by_formula:
            params.append(("filterByFormula", filter_by_formula))
        if max_records is not None:
            params.append(("maxRecords", str(max_records)))

        records: list[dict[str, Any]] = []
        offset: Optional[str] = None
        while True:
            page_params = params + ([("offset", offset)] if offset else [])
            data = await self._request("GET", table, params=page_params)
            records.extend(data.get("records", []))
            offset = data.get("offset")
            if not offset or (max_records is not None and len(records) >= max_records):
                break
        return records[:max_records] if max_records is not None else records

    async def close(self):
        await self._client.aclose()
