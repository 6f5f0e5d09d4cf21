"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations never commit; the calling service owns the
transaction boundary.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import TeamMember, Workspace, WorkspaceMember
from iam.domain.value_objects import TeamMemberId, WorkspaceId, WorkspaceMemberId


@runtime_checkable
class ITeamMemberRepository(Protocol):
    """Repository for TeamMember aggregate persistence."""

    async def get_by_email(self, email: str) -> TeamMember | None:
        """Retrieve a team member by canonical email.

        Args:
            email: Canonical (lower-case) email

        Returns:
            The TeamMember, or None if not found
        """
        ...

    async def get_by_id(self, member_id: TeamMemberId) -> TeamMember | None:
        """Retrieve a team member by ID."""
        ...

    async def add(self, member: TeamMember) -> None:
        """Insert a new team member.

        Raises:
            DuplicateTeamMemberEmailError: If the email is already taken
        """
        ...

    async def update_display_name(self, member: TeamMember) -> None:
        """Persist name, first_name and updated_at of an existing member."""
        ...

    async def list_all(self) -> list[TeamMember]:
        """List all team members ordered by email."""
        ...


@runtime_checkable
class IWorkspaceRepository(Protocol):
    """Repository for Workspace aggregate and membership persistence."""

    async def get_by_id(self, workspace_id: WorkspaceId) -> Workspace | None:
        """Retrieve a workspace by ID."""
        ...

    async def list_for_email(self, email: str) -> list[Workspace]:
        """List workspaces reachable by an email.

        Includes the workspace the email manages and those where the email
        holds an active explicit membership.

        Args:
            email: Canonical (lower-case) email

        Returns:
            Workspaces ordered by creation time
        """
        ...

    async def list_all(self) -> list[Workspace]:
        """List every workspace ordered by creation time."""
        ...

    async def add(self, workspace: Workspace) -> None:
        """Insert a new workspace.

        Raises:
            DuplicateWorkspaceManagerError: If the manager already has one
        """
        ...

    async def save(self, workspace: Workspace) -> None:
        """Persist the mutable settings of an existing workspace."""
        ...

    async def get_member(
        self, workspace_id: WorkspaceId, email: str
    ) -> WorkspaceMember | None:
        """Retrieve an explicit membership by (workspace, canonical email)."""
        ...

    async def get_member_by_id(
        self, workspace_id: WorkspaceId, member_id: WorkspaceMemberId
    ) -> WorkspaceMember | None:
        """Retrieve a membership by ID, scoped to its workspace."""
        ...

    async def list_members(
        self, workspace_id: WorkspaceId, include_inactive: bool = False
    ) -> list[WorkspaceMember]:
        """List memberships of a workspace ordered by email."""
        ...

    async def add_member(self, member: WorkspaceMember) -> None:
        """Insert a new membership.

        Raises:
            DuplicateWorkspaceMemberError: If the email already has a
                membership row in the workspace
        """
        ...

    async def save_member(self, member: WorkspaceMember) -> None:
        """Persist name, first_name, role and active of a membership."""
        ...
