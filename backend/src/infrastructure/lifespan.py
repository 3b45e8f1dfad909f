import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: "FastAPI"):
    storage = app.state.storage
    try:
        await storage.startup()
    except Exception as e:
        logger.exception("Storage startup failed: %s", e)
        raise
    yield
    await storage.close()
