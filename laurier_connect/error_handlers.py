"""Translate domain errors into JSON responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .errors import ConnectError

logger = logging.getLogger(__name__)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConnectError)
    async def connect_error_handler(request: Request, exc: ConnectError):  # type: ignore[override]
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "error": exc.code})


__all__ = ["install_error_handlers"]
