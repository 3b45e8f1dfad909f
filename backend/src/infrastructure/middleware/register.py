from typing import TYPE_CHECKING

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp

from infrastructure.middleware.services.logging_middleware import LoggingMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from settings.config import AppConfig

PREVIEW_ORIGIN_SUFFIX = ".netlify.app"


def _get_cors_origins(config: "AppConfig") -> tuple[list[str], bool]:
    """Allowed origins from FRONTEND_URL and CORS_ORIGINS. Returns (origins, use_credentials)."""
    if not config.cors_origins:
        return ["*"], False  # Wildcard requires allow_credentials=False
    return list(config.cors_origins), True


class CORSAllowPreviewMiddleware:
    """Allow CORS from any *.netlify.app origin (deploy previews)."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: dict, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = None
        for h, v in scope.get("headers", []):
            if h == b"origin":
                origin = v.decode("utf-8")
                break

        if not (origin and origin.endswith(PREVIEW_ORIGIN_SUFFIX)):
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            await send(
                {
                    "type": "http.response.start",
                    "status": 200,
                    "headers": [
                        (b"access-control-allow-origin", origin.encode()),
                        (b"access-control-allow-methods", b"GET, POST, OPTIONS"),
                        (b"access-control-allow-headers", b"Origin, X-Requested-With, Content-Type, Accept"),
                        (b"access-control-max-age", b"86400"),
                        (b"content-length", b"0"),
                    ],
                }
            )
            await send({"type": "http.response.body", "body": b""})
            return

        async def send_wrapper(message):
            if message.get("type") == "http.response.start":
                headers = list(message.get("headers", []))
                if not any(h == b"access-control-allow-origin" for h, _ in headers):
                    headers.append((b"access-control-allow-origin", origin.encode()))
                    message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_wrapper)


def register_middleware(app: "FastAPI", config: "AppConfig"):
    """Register all middleware. CORSAllowPreviewMiddleware is outermost so previews get preflight answers."""
    origins, allow_creds = _get_cors_origins(config)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_creds,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(CORSAllowPreviewMiddleware)
