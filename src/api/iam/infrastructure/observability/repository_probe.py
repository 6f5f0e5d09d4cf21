"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to team member and workspace repository
operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TeamMemberRepositoryProbe(Protocol):
    """Domain probe for team member repository operations."""

    def team_member_added(self, member_id: str, email: str) -> None:
        """Record that a team member was inserted."""
        ...

    def team_member_updated(self, member_id: str) -> None:
        """Record that a team member's display name was updated."""
        ...

    def team_member_not_found(self, email: str) -> None:
        """Record that no team member exists for an email."""
        ...

    def duplicate_team_member_email(self, email: str) -> None:
        """Record that an insert hit the unique email constraint."""
        ...

    def with_context(self, context: ObservationContext) -> TeamMemberRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class WorkspaceRepositoryProbe(Protocol):
    """Domain probe for workspace repository operations."""

    def workspace_added(self, workspace_id: str, manager_email: str) -> None:
        """Record that a workspace was inserted."""
        ...

    def workspace_saved(self, workspace_id: str) -> None:
        """Record that workspace settings were persisted."""
        ...

    def workspace_not_found(self, workspace_id: str) -> None:
        """Record that a workspace was not found."""
        ...

    def workspaces_listed(self, email: str | None, count: int) -> None:
        """Record that workspaces were listed."""
        ...

    def duplicate_workspace_manager(self, manager_email: str) -> None:
        """Record that an insert hit the unique manager constraint."""
        ...

    def workspace_member_added(self, member_id: str, workspace_id: str) -> None:
        ...

    def workspace_member_saved(self, member_id: str) -> None:
        ...

    def duplicate_workspace_member(self, workspace_id: str, email: str) -> None:
        """Record that an insert hit the unique (workspace, email) constraint."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTeamMemberRepositoryProbe:
    """Default implementation of TeamMemberRepositoryProbe using structlog."""

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
    ) -> DefaultTeamMemberRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTeamMemberRepositoryProbe(logger=self._logger, context=context)

    def team_member_added(self, member_id: str, email: str) -> None:
        """Record that a team member was inserted."""
        self._logger.info(
            "team_member_added",
            member_id=member_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def team_member_updated(self, member_id: str) -> None:
        """Record that a team member's display name was updated."""
        self._logger.info(
            "team_member_updated",
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def team_member_not_found(self, email: str) -> None:
        """Record that no team member exists for an email."""
        self._logger.debug(
            "team_member_not_found",
            email=email,
            **self._get_context_kwargs(),
        )

    def duplicate_team_member_email(self, email: str) -> None:
        """Record that an insert hit the unique email constraint."""
        self._logger.warning(
            "duplicate_team_member_email",
            email=email,
            **self._get_context_kwargs(),
        )


class DefaultWorkspaceRepositoryProbe:
    """Default implementation of WorkspaceRepositoryProbe using structlog."""

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
    ) -> DefaultWorkspaceRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultWorkspaceRepositoryProbe(logger=self._logger, context=context)

    def workspace_added(self, workspace_id: str, manager_email: str) -> None:
        """Record that a workspace was inserted."""
        self._logger.info(
            "workspace_added",
            workspace_id=workspace_id,
            manager_email=manager_email,
            **self._get_context_kwargs(),
        )

    def workspace_saved(self, workspace_id: str) -> None:
        """Record that workspace settings were persisted."""
        self._logger.info(
            "workspace_saved",
            workspace_id=workspace_id,
            **self._get_context_kwargs(),
        )

    def workspace_not_found(self, workspace_id: str) -> None:
        """Record that a workspace was not found."""
        self._logger.debug(
            "workspace_not_found",
            workspace_id=workspace_id,
            **self._get_context_kwargs(),
        )

    def workspaces_listed(self, email: str | None, count: int) -> None:
        """Record that workspaces were listed."""
        self._logger.debug(
            "workspaces_listed",
            email=email,
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_workspace_manager(self, manager_email: str) -> None:
        """Record that an insert hit the unique manager constraint."""
        self._logger.warning(
            "duplicate_workspace_manager",
            manager_email=manager_email,
            **self._get_context_kwargs(),
        )

    def workspace_member_added(self, member_id: str, workspace_id: str) -> None:
        self._logger.info(
            "workspace_member_added",
            member_id=member_id,
            workspace_id=workspace_id,
            **self._get_context_kwargs(),
        )

    def workspace_member_saved(self, member_id: str) -> None:
        self._logger.info(
            "workspace_member_saved",
            member_id=member_id,
            **self._get_context_kwargs(),
        )

    def duplicate_workspace_member(self, workspace_id: str, email: str) -> None:
        self._logger.warning(
            "duplicate_workspace_member",
            workspace_id=workspace_id,
            email=email,
            **self._get_context_kwargs(),
        )
