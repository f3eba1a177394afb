"""
Main entrypoint for the Video Store API.

This module assembles the FastAPI application, sets up logging,
registers the handlers that turn domain errors into HTTP responses and
includes versioned routers.  ``create_app`` builds the app, which is
then instantiated at module import time as ``app``::

    uvicorn video_store_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import CatalogError, InvalidInput, NotFound, ValidationError, VideoStoreError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def _status_for(exc: VideoStoreError) -> int:
    if isinstance(exc, NotFound):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (InvalidInput, ValidationError)):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def video_store_error_handler(request: Request, exc: VideoStoreError) -> JSONResponse:
    """Render a domain error as ``{"errors": {field: [message, ...]}}``."""
    status_code = _status_for(exc)
    logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"errors": exc.as_errors()})


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.warning("%s %s -> 502: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"errors": {"catalog": [str(exc)]}},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Performs one‑time setup such as configuring logging, registering
    exception handlers and including versioned API routers.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(VideoStoreError, video_store_error_handler)
    app.add_exception_handler(CatalogError, catalog_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and applies migrations.
        init_db()

    return app


app = create_app()
