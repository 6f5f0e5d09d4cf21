"""Request and response models for workspace API endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.application.value_objects import WorkspaceAuthorizationContext
from iam.domain.aggregates import WorkspaceMember
from iam.domain.value_objects import WorkspaceMemberRole, WorkspaceStatus
from iam.presentation.models import WorkspaceResponse
from shared_kernel.auth.errors import InternalAuthError


class UpdateWorkspaceRequest(BaseModel):
    """Request to update workspace settings.

    Omitted fields are left unchanged. The manager email is not updatable.
    """

    manager_name: str | None = Field(
        default=None, min_length=1, max_length=255, description="Manager name"
    )
    allowed_domains: list[str] | None = Field(
        default=None,
        description="Domains eligible for self-service membership",
        examples=[["example.com"]],
    )
    status: WorkspaceStatus | None = Field(default=None, description="New status")


class WorkspaceListResponse(BaseModel):
    """Response containing the workspaces visible to the caller."""

    workspaces: list[WorkspaceResponse]
    count: int = Field(..., description="Number of workspaces")
    is_super_admin: bool = Field(..., description="Whether the caller is a super admin")


class WorkspaceDetailResponse(BaseModel):
    """A workspace together with the caller's standing in it."""

    workspace: WorkspaceResponse
    is_manager: bool = Field(..., description="Whether the caller manages it")
    member_role: WorkspaceMemberRole | None = Field(
        default=None, description="Caller's explicit membership role, if any"
    )

    @classmethod
    def from_context(
        cls, context: WorkspaceAuthorizationContext
    ) -> WorkspaceDetailResponse:
        workspace = context.current_workspace
        if workspace is None:
            raise InternalAuthError("No workspace context")
        return cls(
            workspace=WorkspaceResponse.from_domain(workspace),
            is_manager=workspace.is_managed_by(context.user.email),
            member_role=context.current_member.role
            if context.current_member
            else None,
        )


class CreateMemberRequest(BaseModel):
    """Request to add an explicit member to a workspace."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=320,
        description="Member email; its domain must be allowed by the workspace",
        examples=["bob@example.com"],
    )
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    first_name: str | None = Field(default=None, max_length=255, description="First name")
    role: WorkspaceMemberRole = Field(
        default=WorkspaceMemberRole.MEMBER, description="Role within the workspace"
    )


class UpdateMemberRequest(BaseModel):
    """Request to change a workspace member. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    role: WorkspaceMemberRole | None = None
    active: bool | None = Field(
        default=None, description="Set to true to restore a removed member"
    )


class WorkspaceMemberResponse(BaseModel):
    """Response model for an explicit workspace member."""

    id: str = Field(..., description="Workspace member ID")
    workspace_id: str = Field(..., description="Workspace ID")
    email: str = Field(..., description="Canonical email")
    name: str | None = Field(default=None, description="Display name")
    first_name: str | None = Field(default=None, description="First name")
    role: WorkspaceMemberRole = Field(..., description="Role within the workspace")
    active: bool = Field(..., description="Whether the membership is active")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_domain(cls, member: WorkspaceMember) -> WorkspaceMemberResponse:
        return cls(
            id=member.id.value,
            workspace_id=member.workspace_id.value,
            email=member.email,
            name=member.name,
            first_name=member.first_name,
            role=member.role,
            active=member.active,
            created_at=member.created_at,
        )


class WorkspaceMemberListResponse(BaseModel):
    """Response containing a workspace's explicit members."""

    members: list[WorkspaceMemberResponse]
    count: int = Field(..., description="Number of members")
