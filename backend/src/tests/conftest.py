import json
import re
from itertools import count
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio
from faker import Faker

from infrastructure.airtable import AirtableClient
from infrastructure.application import create_app
from infrastructure.database import Database
from infrastructure.repository.external_store import ExternalStoreClient
from infrastructure.storage.external import ExternalTableStorage
from infrastructure.storage.relational import RelationalStorage
from settings.config import AppConfig, StorageBackend
from tests.fake.db_data.waitlist import contact_payload as fake_contact_payload
from tests.fake.db_data.waitlist import waitlist_payload as fake_waitlist_payload

FORMULA_RE = re.compile(r'^\{(?P<field>[^}]+)\} = "(?P<value>(?:[^"\\]|\\.)*)"$')
CREATED_TIME = "2026-01-15T10:30:00.000Z"


class FakeAirtable:
    """In-memory stand-in for the Airtable REST API, served through httpx.MockTransport."""

    def __init__(self, page_size: int = 100):
        self.tables: dict[str, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        self.fail = False
        self.page_size = page_size
        self._ids = count(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(503, json={"error": "SERVICE_UNAVAILABLE"})
        if request.headers.get("Authorization") != "Bearer test-key":
            return httpx.Response(401, json={"error": "AUTHENTICATION_REQUIRED"})

        table = unquote(request.url.path.rsplit("/", 1)[-1])
        rows = self.tables.setdefault(table, [])
        if request.method == "POST":
            created = []
            for record in json.loads(request.content)["records"]:
                row = {"id": f"rec{next(self._ids):05d}", "createdTime": CREATED_TIME, "fields": record["fields"]}
                rows.append(row)
                created.append(row)
            return httpx.Response(200, json={"records": created})
        return self._select(request, rows)

    def _select(self, request: httpx.Request, rows: list[dict]) -> httpx.Response:
        params = request.url.params
        matched = rows
        formula = params.get("filterByFormula")
        if formula:
            m = FORMULA_RE.match(formula)
            assert m, f"unexpected formula {formula!r}"
            value = m.group("value").replace('\\"', '"').replace("\\\\", "\\")
            matched = [r for r in rows if r["fields"].get(m.group("field")) == value]
        if params.get("maxRecords"):
            matched = matched[: int(params["maxRecords"])]

        fields = params.get_list("fields[]")
        if fields:
            matched = [
                {**r, "fields": {k: v for k, v in r["fields"].items() if k in fields}} for r in matched
            ]

        page_size = min(int(params.get("pageSize", self.page_size)), self.page_size)
        start = int(params.get("offset", 0))
        page = matched[start:start + page_size]
        body = {"records": page}
        if start + page_size < len(matched):
            body["offset"] = str(start + page_size)
        return httpx.Response(200, json=body)

    def rows(self, table: str) -> list[dict]:
        return self.tables.get(table, [])


@pytest.fixture
def faker() -> Faker:
    Faker.seed(1234)
    return Faker()


@pytest.fixture
def waitlist_payload(faker):
    return lambda **overrides: fake_waitlist_payload(faker, **overrides)


@pytest.fixture
def contact_payload(faker):
    return lambda **overrides: fake_contact_payload(faker, **overrides)


@pytest.fixture
def fake_airtable() -> FakeAirtable:
    return FakeAirtable()


@pytest_asyncio.fixture
async def airtable_client(fake_airtable):
    client = AirtableClient(
        api_key="test-key",
        base_id="appTestBase",
        transport=httpx.MockTransport(fake_airtable.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def external_store(airtable_client) -> ExternalStoreClient:
    return ExternalStoreClient(airtable_client)


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'chirpin.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def relational_storage(database):
    storage = RelationalStorage(database)
    await storage.startup()
    return storage


@pytest.fixture
def airtable_storage(external_store) -> ExternalTableStorage:
    return ExternalTableStorage(external_store)


@pytest_asyncio.fixture(params=[StorageBackend.airtable, StorageBackend.database])
async def storage(request, airtable_storage, relational_storage):
    if request.param == StorageBackend.airtable:
        return airtable_storage
    return relational_storage


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(airtable_api_key="test-key", airtable_base_id="appTestBase")


@pytest_asyncio.fixture
async def api_client(app_config, storage):
    app = create_app(app_config, storage=storage)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
