"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from iam.dependencies import get_authorization_config
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    check_database_connection,
    close_database_connections,
)
from infrastructure.error_handlers import register_exception_handlers
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def pulse_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)

    probe = DefaultStartupProbe()
    config = get_authorization_config()
    if config.google_client_id is None:
        probe.audience_check_disabled()
    probe.application_started(
        version=__version__,
        super_admin_count=len(config.super_admin_emails),
    )

    yield

    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title="Pulse API",
    description="Weekly pulse check-ins with multi-tenant workspaces",
    version=__version__,
    lifespan=pulse_lifespan,
)

register_exception_handlers(app)

app.include_router(iam_router)


@app.get("/health")
async def health() -> dict:
    """Health check including database connectivity."""
    database_ok = await check_database_connection()
    return {
        "status": "ok" if database_ok else "degraded",
        "version": __version__,
        "checks": {"database": "pass" if database_ok else "fail"},
    }
