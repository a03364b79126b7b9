"""
FastAPI application entrypoint for the Spotify statistics service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from statify.api.routes import router as api_router
from statify.core.config import get_settings
from statify.core.errors import StatifyError
from statify.core.logging import configure_logging

logger = logging.getLogger(__name__)


async def handle_statify_error(request: Request, exc: StatifyError) -> JSONResponse:
    """Render service errors as ``{"message": ...}`` JSON bodies."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Statify",
        version="0.1.0",
        description="Spotify sign-in and listening statistics API.",
    )
    app.include_router(api_router, prefix="/api")
    app.add_exception_handler(StatifyError, handle_statify_error)
    return app


app = create_app()

__all__ = ["app", "create_app"]
