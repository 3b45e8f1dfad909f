import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, FastAPI, Request

from app.services.contact import build_contact_service
from app.services.waitlist import build_waitlist_service

if TYPE_CHECKING:
    from app.services.contact import ContactService
    from app.services.waitlist import WaitlistService
    from app.storage import Storage
    from settings.config import AppConfig

logger = logging.getLogger(__name__)


def get_app(request: Request) -> "FastAPI":
    return request.app


app_dep = Annotated["FastAPI", Depends(get_app)]


def get_storage(app: app_dep) -> "Storage":
    return app.state.storage


storage_dep = Annotated["Storage", Depends(get_storage)]


def get_config(app: app_dep) -> "AppConfig":
    return app.state.config


config_dep = Annotated["AppConfig", Depends(get_config)]


def get_waitlist_service(storage: storage_dep) -> "WaitlistService":
    return build_waitlist_service(storage)


waitlist_service_dep = Annotated["WaitlistService", Depends(get_waitlist_service)]


def get_contact_service(storage: storage_dep) -> "ContactService":
    return build_contact_service(storage)


contact_service_dep = Annotated["ContactService", Depends(get_contact_service)]
