"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.access_control import OriginAccessControlMiddleware
from src.api.dependencies import build_store
from src.api.models import HealthResponse
from src.api.v1 import router as v1_router, unsupported_method_handler
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "User Registration API v1 - Register users into the key-value store",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the configured key-value store on startup
      (connection pool and migrations for the postgres backend)
    - Closes the connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info(f"Using {settings.kv_backend} key-value store, namespace {settings.kv_namespace}")

    store, pool = build_store(settings)

    # Store in app state for dependency injection
    app.state.store = store

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="kv-register",
    description="User Registration API - Stores email and bcrypt password hash pairs in a key-value store",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Origins are read from the settings on every request
app.add_middleware(
    OriginAccessControlMiddleware,
    origins_provider=lambda: get_settings().allowed_origins,
)
app.add_exception_handler(StarletteHTTPException, unsupported_method_handler)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and store are healthy.
    Raises exception if the store connection fails.
    """
    request.app.state.store.check_connection()
    return HealthResponse(status="healthy")
