from typing import TYPE_CHECKING

from infrastructure.api import (
    contact,
    debug,
    waitlist,
)

if TYPE_CHECKING:
    from fastapi import FastAPI

API_PREFIX = "/api"

routers = [
    waitlist.router,
    contact.router,
    debug.router,
]


def register_routes(app: "FastAPI"):
    for router in routers:
        if API_PREFIX:
            app.include_router(router, prefix=API_PREFIX)
        else:
            app.include_router(router)
