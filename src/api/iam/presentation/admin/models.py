"""Response models for administration API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.presentation.models import TeamMemberResponse, WorkspaceResponse


class TeamListResponse(BaseModel):
    """Response containing all team members."""

    members: list[TeamMemberResponse]
    count: int = Field(..., description="Number of team members")


class AdminWorkspaceListResponse(BaseModel):
    """Response containing every workspace."""

    workspaces: list[WorkspaceResponse]
    count: int = Field(..., description="Number of workspaces")
