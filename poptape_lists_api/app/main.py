"""
Main entrypoint for the Poptape Lists API.

This module assembles the FastAPI application: logging, CORS, the
JSON-only and request-logging middlewares, error handlers and the
versioned routers.  ``create_app`` builds and configures the app, which
is then instantiated at module import time as ``app``, e.g.::

    uvicorn poptape_lists_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import build_error_payload, register_error_handlers
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPES = {"application/json", "application/json; charset=utf-8"}

# Methods that never carry a body and are exempt from the JSON check.
_BODYLESS_METHODS = {"GET", "HEAD", "OPTIONS", "DELETE"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply migrations at startup.  This creates the database file if it
    # does not exist and ensures every list table is present.
    init_db()
    logger.info("Starting %s %s", settings.project_name, settings.api_version)
    yield
    logger.info("Shutting down %s", settings.project_name)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(
        settings.log_level,
        settings.log_file or None,
        fmt=settings.log_format,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    @app.middleware("http")
    async def json_only(request: Request, call_next):
        if request.method not in _BODYLESS_METHODS:
            content_type = request.headers.get("content-type", "").lower()
            if content_type not in JSON_CONTENT_TYPES:
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=build_error_payload("invalid_content_type", "Content-Type must be application/json"),
                )
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        client = request.client.host if request.client else "-"
        logger.info("%s %s from %s -> %s", request.method, request.url.path, client, response.status_code)
        return response

    # CORS must stay outermost: responses rejected by the middlewares
    # above still need its headers.
    origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Access-Token"],
    )

    register_error_handlers(app)
    app.include_router(v1_router)

    return app


app = create_app()
