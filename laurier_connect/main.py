"""Application entry point for the FastAPI backend."""
from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .error_handlers import install_error_handlers
from .routers import (
    auth_router,
    connections_router,
    directory_router,
    events_router,
    messages_router,
    posts_router,
    realtime_router,
)
from .services import ChangeStreamManager, build_services

logger = logging.getLogger(__name__)

CHANGE_TOPICS = ("directory", "connections", "chats", "feed", "events")


def _cors_origins(raw: str | None) -> list[str]:
    if raw:
        origins: Iterable[str] = [origin.strip() for origin in raw.split(",") if origin.strip()]
    else:
        origins = ["*"]
    return list(origins)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an application with its own, empty set of in-memory stores."""

    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, version=settings.api_version)
    app.state.settings = settings
    app.state.services = build_services(settings)
    app.state.change_stream = ChangeStreamManager()
    app.state.change_stream.attach(app.state.services.notifier)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(directory_router)
    app.include_router(connections_router)
    app.include_router(messages_router)
    app.include_router(posts_router)
    app.include_router(events_router)
    app.include_router(realtime_router)

    @app.get("/api", tags=["system"])
    def api_info() -> dict[str, str]:
        return {"service": settings.app_name, "version": settings.api_version}

    @app.get("/api/changes", tags=["system"])
    def change_versions() -> dict[str, int]:
        """Current version of every store; clients poll and refresh on change."""
        notifier = app.state.services.notifier
        return {topic: notifier.version(topic) for topic in CHANGE_TOPICS}

    @app.get("/health", tags=["system"])
    async def healthcheck() -> dict[str, object]:
        return {"status": "ok", "users": len(app.state.services.directory.all())}

    logger.info("%s %s ready (email domain %s)", settings.app_name, settings.api_version, settings.email_suffix)
    return app


app = create_app()


__all__ = ["app", "create_app"]
