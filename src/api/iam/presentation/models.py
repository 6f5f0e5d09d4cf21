"""Pydantic models shared across IAM API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.application.value_objects import AuthenticatedUser
from iam.domain.aggregates import TeamMember, Workspace
from iam.domain.value_objects import TeamMemberRole, WorkspaceStatus


class UserResponse(BaseModel):
    """The caller as described by the identity provider."""

    email: str = Field(..., description="Canonical email")
    name: str = Field(..., description="Display name")
    picture: str | None = Field(default=None, description="Avatar URL")
    given_name: str | None = Field(default=None, description="First name")

    @classmethod
    def from_domain(cls, user: AuthenticatedUser) -> UserResponse:
        return cls(
            email=user.email,
            name=user.name,
            picture=user.picture,
            given_name=user.given_name,
        )


class TeamMemberResponse(BaseModel):
    """Response model for a team member."""

    id: str = Field(..., description="Team member ID")
    email: str = Field(..., description="Canonical email")
    name: str = Field(..., description="Display name")
    first_name: str | None = Field(default=None, description="First name")
    role: TeamMemberRole = Field(..., description="Single-tenant role")
    active: bool = Field(..., description="Whether the account is active")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_domain(cls, member: TeamMember) -> TeamMemberResponse:
        """Convert domain TeamMember aggregate to API response."""
        return cls(
            id=member.id.value,
            email=member.email,
            name=member.name,
            first_name=member.first_name,
            role=member.role,
            active=member.active,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )


class WorkspaceResponse(BaseModel):
    """Response containing workspace details."""

    id: str = Field(..., description="Workspace ID")
    manager_email: str = Field(..., description="Email of the workspace manager")
    manager_name: str | None = Field(default=None, description="Manager name")
    allowed_domains: list[str] = Field(
        ..., description="Domains eligible for self-service membership"
    )
    status: WorkspaceStatus = Field(..., description="Workspace status")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_domain(cls, workspace: Workspace) -> WorkspaceResponse:
        """Convert domain Workspace aggregate to API response."""
        return cls(
            id=workspace.id.value,
            manager_email=workspace.manager_email,
            manager_name=workspace.manager_name,
            allowed_domains=list(workspace.allowed_domains),
            status=workspace.status,
            created_at=workspace.created_at,
            updated_at=workspace.updated_at,
        )
