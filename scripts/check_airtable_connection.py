#!/usr/bin/env python3
"""Check that the configured Airtable base answers and both tables are readable.

Run: python scripts/check_airtable_connection.py
"""
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")
sys.path.insert(0, str(project_root / "backend" / "src"))

from app.exceptions import StoreError  # noqa: E402
from infrastructure.airtable import AirtableClient  # noqa: E402
from infrastructure.repository.external_store import CONTACT_TABLE, WAITLIST_TABLE  # noqa: E402
from settings.config import load_config  # noqa: E402


async def check() -> bool:
    config = load_config()
    print(f"AIRTABLE_API_KEY set: {bool(config.airtable_api_key)}")
    print(f"AIRTABLE_BASE_ID set: {bool(config.airtable_base_id)}")
    if not config.has_airtable_credentials:
        print("Missing Airtable credentials in .env")
        return False

    client = AirtableClient(
        api_key=config.airtable_api_key,
        base_id=config.airtable_base_id,
        api_url=config.airtable_api_url,
        timeout=config.airtable_timeout,
    )
    ok = True
    try:
        for table in (WAITLIST_TABLE, CONTACT_TABLE):
            try:
                records = await client.list_records(table, max_records=1)
                print(f"{table}: reachable ({len(records)} sample record)")
            except StoreError as e:
                print(f"{table}: {e}")
                ok = False
    finally:
        await client.close()
    return ok


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(check()) else 1)
