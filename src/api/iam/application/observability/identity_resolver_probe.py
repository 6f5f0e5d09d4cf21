"""Protocol for identity resolution observability.

Defines the interface for domain probes that capture application-level
domain events when verified identities are mapped to team members.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityResolverProbe(Protocol):
    """Domain probe for identity resolution."""

    def team_member_resolved(
        self,
        member_id: str,
        email: str,
        was_created: bool,
        was_updated: bool,
    ) -> None:
        """Record that a team member was found, updated or created."""
        ...

    def team_member_insert_conflict(self, email: str) -> None:
        """Record that a concurrent request created the same team member first."""
        ...

    def team_member_resolution_failed(self, email: str, error: str) -> None:
        """Record that identity resolution failed."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityResolverProbe:
    """Default implementation of IdentityResolverProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultIdentityResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityResolverProbe(logger=self._logger, context=context)

    def team_member_resolved(
        self,
        member_id: str,
        email: str,
        was_created: bool,
        was_updated: bool,
    ) -> None:
        """Record that a team member was found, updated or created."""
        self._logger.info(
            "team_member_resolved",
            member_id=member_id,
            email=email,
            was_created=was_created,
            was_updated=was_updated,
            **self._get_context_kwargs(),
        )

    def team_member_insert_conflict(self, email: str) -> None:
        """Record that a concurrent request created the same team member first."""
        self._logger.info(
            "team_member_insert_conflict",
            email=email,
            **self._get_context_kwargs(),
        )

    def team_member_resolution_failed(self, email: str, error: str) -> None:
        """Record that identity resolution failed."""
        self._logger.error(
            "team_member_resolution_failed",
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )
