"""Probe for Pulse process lifecycle events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    def application_started(self, version: str, super_admin_count: int) -> None: ...

    def audience_check_disabled(self) -> None:
        """No GOOGLE_CLIENT_ID is configured, so any audience is accepted."""
        ...

    def application_stopped(self) -> None: ...

    def with_context(self, context: ObservationContext) -> StartupProbe: ...


class DefaultStartupProbe:
    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        return {} if self._context is None else self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, version: str, super_admin_count: int) -> None:
        self._logger.info(
            "application_started",
            version=version,
            super_admin_count=super_admin_count,
            **self._get_context_kwargs(),
        )

    def audience_check_disabled(self) -> None:
        self._logger.warning(
            "token_audience_check_disabled", **self._get_context_kwargs()
        )

    def application_stopped(self) -> None:
        self._logger.info("application_stopped", **self._get_context_kwargs())
