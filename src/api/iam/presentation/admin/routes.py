"""Administration routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from iam.application.services import TeamMemberService, WorkspaceService
from iam.application.value_objects import (
    AuthorizationContext,
    WorkspaceAuthorizationContext,
)
from iam.dependencies import (
    get_admin_context,
    get_super_admin_context,
    get_team_member_service,
    get_workspace_service,
)
from iam.presentation.admin.models import AdminWorkspaceListResponse, TeamListResponse
from iam.presentation.models import TeamMemberResponse, WorkspaceResponse

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
)


@router.get(
    "/team",
    response_model=TeamListResponse,
    summary="List team members",
    responses={
        200: {"description": "Team members listed"},
        401: {"description": "Authentication required"},
        403: {"description": "Admin access required"},
    },
)
async def list_team(
    context: Annotated[AuthorizationContext, Depends(get_admin_context)],
    service: Annotated[TeamMemberService, Depends(get_team_member_service)],
) -> TeamListResponse:
    """List all team members (admins only)."""
    members = await service.list_team_members(context)
    return TeamListResponse(
        members=[TeamMemberResponse.from_domain(m) for m in members],
        count=len(members),
    )


@router.get(
    "/workspaces",
    response_model=AdminWorkspaceListResponse,
    summary="List all workspaces",
    responses={
        200: {"description": "Workspaces listed"},
        401: {"description": "Authentication required"},
        403: {"description": "Super admin access required"},
    },
)
async def list_all_workspaces(
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_super_admin_context)
    ],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
) -> AdminWorkspaceListResponse:
    """List every workspace (super admins only)."""
    workspaces = await service.list_workspaces(context)
    return AdminWorkspaceListResponse(
        workspaces=[WorkspaceResponse.from_domain(ws) for ws in workspaces],
        count=len(workspaces),
    )
