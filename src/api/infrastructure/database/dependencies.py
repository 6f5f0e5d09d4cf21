"""FastAPI database dependencies.

The engine and its session factory are built on first use and kept for
the life of the process. Sessions never auto-commit: application services
open their own ``session.begin()`` blocks.
"""

from __future__ import annotations

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine, create_session_factory
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe: ConnectionProbe = DefaultConnectionProbe()


@lru_cache
def get_engine() -> AsyncEngine:
    settings = get_database_settings()
    engine = create_engine(settings)
    _probe.engine_created(
        host=settings.host,
        database=settings.database,
        pool_min=settings.pool_min_connections,
        pool_max=settings.pool_max_connections,
    )
    return engine


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return create_session_factory(get_engine())


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request."""
    async with get_session_factory()() as session:
        yield session


async def check_database_connection() -> bool:
    """Report whether ``SELECT 1`` succeeds; failures go to the probe."""
    settings = get_database_settings()
    try:
        async with get_engine().connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as e:
        _probe.connection_failed(
            host=settings.host, database=settings.database, error=e
        )
        return False
    return True


async def close_database_connections() -> None:
    """Dispose the engine if one was built, so the next use rebuilds it."""
    if get_engine.cache_info().currsize == 0:
        return
    await get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()
    settings = get_database_settings()
    _probe.engine_disposed(host=settings.host, database=settings.database)
