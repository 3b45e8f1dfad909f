import logging
from typing import TYPE_CHECKING, Optional

from fastapi import FastAPI

from infrastructure.exception_handlers import register_exception_handlers
from infrastructure.lifespan import lifespan
from infrastructure.middleware.register import register_middleware
from infrastructure.routes import register_routes
from infrastructure.storage.factory import build_storage

if TYPE_CHECKING:
    from app.storage import Storage
    from settings.config import AppConfig

logger = logging.getLogger(__name__)


def create_app(config: "AppConfig", storage: Optional["Storage"] = None) -> FastAPI:
    """Wire the API around a storage backend chosen once for the whole process."""
    app = FastAPI(title="Chirpin API", lifespan=lifespan)
    app.state.config = config
    app.state.storage = storage if storage is not None else build_storage(config)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app, config)
    return app
