"""WorkspaceMember entity for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime

from iam.domain.value_objects import (
    WorkspaceId,
    WorkspaceMemberId,
    WorkspaceMemberRole,
    canonical_email,
)


@dataclass(frozen=True)
class WorkspaceMember:
    """Explicit (non-manager) membership of an email in a workspace.

    Looked up by (workspace_id, email). The manager of a workspace does not
    need a membership row. Memberships are never hard-deleted: removal sets
    ``active`` to False, which drops the workspace from the member's
    resolved set.
    """

    id: WorkspaceMemberId
    workspace_id: WorkspaceId
    email: str
    name: str | None
    first_name: str | None
    role: WorkspaceMemberRole
    active: bool
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.email or "@" not in self.email:
            raise ValueError(f"Invalid member email: {self.email!r}")
        object.__setattr__(self, "email", canonical_email(self.email))

    @classmethod
    def create(
        cls,
        member_id: WorkspaceMemberId,
        workspace_id: WorkspaceId,
        email: str,
        name: str,
        first_name: str | None = None,
        role: WorkspaceMemberRole = WorkspaceMemberRole.MEMBER,
    ) -> WorkspaceMember:
        return cls(
            id=member_id,
            workspace_id=workspace_id,
            email=email,
            name=name,
            first_name=first_name,
            role=role,
            active=True,
            created_at=datetime.now(UTC),
        )

    def with_changes(
        self,
        name: str | None = None,
        first_name: str | None = None,
        role: WorkspaceMemberRole | None = None,
        active: bool | None = None,
    ) -> WorkspaceMember:
        """Return a copy with the given fields changed; None leaves a field as is."""
        return replace(
            self,
            name=self.name if name is None else name,
            first_name=self.first_name if first_name is None else first_name,
            role=self.role if role is None else role,
            active=self.active if active is None else active,
        )

    def deactivate(self) -> WorkspaceMember:
        return replace(self, active=False)
