"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.adapters.cache import InMemoryEphemeralStore, RedisEphemeralStore, create_redis_client
from src.adapters.repository.postgres import create_pool, run_migrations
from src.adapters.smtp import BackgroundNotifier, ConsoleNotifier, SmtpNotifier
from src.api.errors import register_error_handlers
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings
from src.domain.ports import Notifier

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Credential API v1 - Registration, login and password reset",
    },
]


def build_notifier(settings: Settings) -> BackgroundNotifier:
    """Select the delivery backend and move sends off the request thread."""
    inner: Notifier
    if settings.email_backend == "smtp":
        inner = SmtpNotifier(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.smtp_sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_ssl=settings.smtp_use_ssl,
            timeout_seconds=settings.smtp_timeout_seconds,
        )
    else:
        inner = ConsoleNotifier()
    return BackgroundNotifier(
        inner,
        max_workers=settings.notifier_workers,
        max_pending=settings.notifier_max_pending,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool and runs migrations on startup
    - Connects the ephemeral store and notifier
    - Closes everything on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout_seconds=settings.db_timeout_seconds,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    redis_client = None
    if settings.ephemeral_backend == "redis":
        logger.info("Connecting to Redis...")
        redis_client = create_redis_client(settings.redis_url, settings.redis_timeout_seconds)
        app.state.ephemeral_store = RedisEphemeralStore(redis_client)
    else:
        logger.warning("Using in-memory ephemeral store - state is lost on restart")
        app.state.ephemeral_store = InMemoryEphemeralStore()

    notifier = build_notifier(settings)

    # Store resources in app state for dependency injection
    app.state.pool = pool
    app.state.redis = redis_client
    app.state.notifier = notifier

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    notifier.shutdown(wait=True)
    if redis_client is not None:
        redis_client.close()
    pool.close()
    logger.info("Connections closed")


app = FastAPI(
    title="skillmatch-auth",
    description="Credential lifecycle API - email-verified registration and password reset",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_error_handlers(app)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with store validation.

    Returns 200 OK if the database (and Redis, when configured) respond.
    Raises exception if a connection fails.
    """
    with request.app.state.pool.connection() as conn:
        conn.execute("SELECT 1")

    if request.app.state.redis is not None:
        request.app.state.redis.ping()

    return {"status": "healthy"}
