"""Protocol for workspace provisioning observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WorkspaceProvisionerProbe(Protocol):
    """Domain probe for lazy workspace provisioning."""

    def workspace_provisioned(
        self, workspace_id: str, manager_email: str
    ) -> None:
        """Record that a new workspace was created for a first-time user."""
        ...

    def workspace_provision_skipped(self, email: str, reason: str) -> None:
        """Record that no workspace was created (reason: has_workspaces, domain_not_allowed)."""
        ...

    def workspace_insert_conflict(self, manager_email: str) -> None:
        """Record that a concurrent request provisioned the workspace first."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceProvisionerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultWorkspaceProvisionerProbe:
    """Default implementation of WorkspaceProvisionerProbe using structlog."""

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
    ) -> DefaultWorkspaceProvisionerProbe:
        """Create a new probe with observation context bound."""
        return DefaultWorkspaceProvisionerProbe(logger=self._logger, context=context)

    def workspace_provisioned(
        self, workspace_id: str, manager_email: str
    ) -> None:
        self._logger.info(
            "workspace_provisioned",
            workspace_id=workspace_id,
            manager_email=manager_email,
            **self._get_context_kwargs(),
        )

    def workspace_provision_skipped(self, email: str, reason: str) -> None:
        self._logger.debug(
            "workspace_provision_skipped",
            email=email,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def workspace_insert_conflict(self, manager_email: str) -> None:
        self._logger.info(
            "workspace_insert_conflict",
            manager_email=manager_email,
            **self._get_context_kwargs(),
        )
