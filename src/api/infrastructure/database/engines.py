"""Async engine and session factory construction.

Pulse talks to PostgreSQL through asyncpg. The pool keeps
``pool_min_connections`` open and may grow up to ``pool_max_connections``
under load.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

APPLICATION_NAME = "pulse-api"

__all__ = [
    "APPLICATION_NAME",
    "build_async_url",
    "create_engine",
    "create_session_factory",
]


def build_async_url(settings: DatabaseSettings) -> str:
    """Render the asyncpg URL with percent-encoded credentials."""
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the process-wide async engine.

    Connections are tagged with ``application_name`` so they can be told
    apart in ``pg_stat_activity``.
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_min_connections,
        max_overflow=settings.pool_max_connections - settings.pool_min_connections,
        pool_pre_ping=True,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Aggregates are rebuilt from rows after commit, never lazily refreshed
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
