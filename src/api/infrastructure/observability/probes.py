"""Database connection probe.

Reports engine lifecycle and reachability of the Pulse database. Health
checks call ``connection_failed`` instead of raising, so an outage shows
up in the logs and as a ``degraded`` health status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Observes the database engine."""

    def engine_created(
        self, host: str, database: str, pool_min: int, pool_max: int
    ) -> None: ...

    def connection_failed(self, host: str, database: str, error: Exception) -> None: ...

    def engine_disposed(self, host: str, database: str) -> None: ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe: ...


class DefaultConnectionProbe:
    """structlog-backed ConnectionProbe."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(
        self, host: str, database: str, pool_min: int, pool_max: int
    ) -> None:
        self._logger.info(
            "database_engine_created",
            host=host,
            database=database,
            pool_min=pool_min,
            pool_max=pool_max,
            **self._get_context_kwargs(),
        )

    def connection_failed(self, host: str, database: str, error: Exception) -> None:
        self._logger.error(
            "database_unreachable",
            host=host,
            database=database,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self, host: str, database: str) -> None:
        self._logger.info(
            "database_engine_disposed",
            host=host,
            database=database,
            **self._get_context_kwargs(),
        )
