#!/usr/bin/env python3
"""Create the users, waitlist_registrations and contact_submissions tables.

Run: python scripts/init_db.py
"""
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")
sys.path.insert(0, str(project_root / "backend" / "src"))

from infrastructure.database import Database  # noqa: E402
from settings.config import load_config  # noqa: E402


async def init_db() -> bool:
    config = load_config()
    if not config.database_url:
        print("Set DATABASE_URL or POSTGRES_USER/PASSWORD/HOST/DB in .env")
        return False

    db = Database(config.database_url, echo=config.sqlalchemy_echo)
    try:
        await db.check_connection()
        await db.create_tables()
    except Exception as e:
        print(f"Database initialisation failed: {e}")
        return False
    finally:
        await db.dispose()
    print("Tables are in place")
    return True


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(init_db()) else 1)
