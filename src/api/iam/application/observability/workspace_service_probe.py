"""Protocol for workspace application service observability.

Events describe changes made by an authorized caller. The caller is not
an event argument: the service binds it through an ObservationContext,
so it appears as ``caller_email`` on every event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WorkspaceServiceProbe(Protocol):
    """Domain probe for workspace and membership management."""

    def workspace_updated(self, workspace_id: str) -> None:
        """Record that workspace settings were changed."""
        ...

    def members_listed(self, workspace_id: str, count: int) -> None: ...

    def member_added(self, workspace_id: str, member_id: str, email: str) -> None:
        ...

    def member_reactivated(self, workspace_id: str, member_id: str) -> None:
        """Record that a removed member was added again."""
        ...

    def member_updated(self, workspace_id: str, member_id: str) -> None: ...

    def member_removed(self, workspace_id: str, member_id: str) -> None: ...

    def member_rejected(self, workspace_id: str, email: str, reason: str) -> None:
        """Record a refused addition (reason: domain_not_allowed, already_member)."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultWorkspaceServiceProbe:
    """Default implementation of WorkspaceServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultWorkspaceServiceProbe:
        return DefaultWorkspaceServiceProbe(logger=self._logger, context=context)

    def workspace_updated(self, workspace_id: str) -> None:
        self._logger.info(
            "workspace_updated",
            workspace_id=workspace_id,
            **self._get_context_kwargs(),
        )

    def members_listed(self, workspace_id: str, count: int) -> None:
        self._logger.debug(
            "workspace_members_listed",
            workspace_id=workspace_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def member_added(self, workspace_id: str, member_id: str, email: str) -> None:
        self._logger.info(
            "workspace_member_created",
            workspace_id=workspace_id,
            member_id=member_id,
            member_email=email,
            **self._get_context_kwargs(),
        )

    def member_reactivated(self, workspace_id: str, member_id: str) -> None:
        self._logger.info(
            "workspace_member_reactivated",
            workspace_id=workspace_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def member_updated(self, workspace_id: str, member_id: str) -> None:
        self._logger.info(
            "workspace_member_updated",
            workspace_id=workspace_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def member_removed(self, workspace_id: str, member_id: str) -> None:
        self._logger.info(
            "workspace_member_removed",
            workspace_id=workspace_id,
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def member_rejected(self, workspace_id: str, email: str, reason: str) -> None:
        self._logger.warning(
            "workspace_member_rejected",
            workspace_id=workspace_id,
            member_email=email,
            reason=reason,
            **self._get_context_kwargs(),
        )
