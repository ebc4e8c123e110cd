"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from psycopg_pool import ConnectionPool

from onboard.adapters.repository.postgres import run_migrations
from onboard.api.errors import install_exception_handlers
from onboard.api.routes import router as api_router
from onboard.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "identity",
        "description": "Register users by email and/or phone and mark them verified",
    },
    {
        "name": "students",
        "description": "Student profile intake - create and list profiles",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates one connection pool per store on startup
    - Runs each store's migrations on startup
    - Closes the pools on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to databases...")

    identity_pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )
    profile_pool = ConnectionPool(
        conninfo=settings.profiles_dsn,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    logger.info("Running database migrations...")
    run_migrations(identity_pool, "identity")
    run_migrations(profile_pool, "profiles")

    # Store pools in app state for dependency injection
    app.state.identity_pool = identity_pool
    app.state.profile_pool = profile_pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    profile_pool.close()
    identity_pool.close()
    logger.info("Database connection pools closed")


app = FastAPI(
    title="onboard",
    description="Student onboarding API - identity registration/verification and profile intake",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and both stores are reachable.
    """
    for pool in (request.app.state.identity_pool, request.app.state.profile_pool):
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
