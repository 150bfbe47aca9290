"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, routers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from psycopg_pool import AsyncConnectionPool

from hubs_api import __version__
from hubs_api.adapters.repository import (
    InMemoryHubRepository,
    PostgresHubRepository,
    run_migrations,
)
from hubs_api.api.errors import register_exception_handlers
from hubs_api.api.routes import fallback_router, router
from hubs_api.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "hubs",
        "description": "Create, read, update and delete hubs",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the configured hub repository on startup
    - For PostgreSQL: opens the connection pool and runs migrations
    - Closes the connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    pool: AsyncConnectionPool | None = None
    if settings.hub_store == "postgres":
        logger.info("Connecting to database...")
        pool = AsyncConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=False,
        )
        await pool.open(wait=True)

        logger.info("Running database migrations...")
        await run_migrations(pool)

        app.state.hubs = PostgresHubRepository(pool)
    else:
        logger.info("Using in-memory hub store")
        app.state.hubs = InMemoryHubRepository()

    logger.info("Server listening on port %s", settings.port)

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        await pool.close()
        logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    """Build the application with all routers and handlers attached."""
    application = FastAPI(
        title="hubs-api",
        description="Hubs API - CRUD over a single hubs collection",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    register_exception_handlers(application)
    application.include_router(router, tags=["hubs"])
    # Catch-all must come last so it only sees unmatched requests
    application.include_router(fallback_router)
    return application


app = create_app()
