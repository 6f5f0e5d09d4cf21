"""Workspace routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from iam.application.services import WorkspaceService
from iam.application.value_objects import WorkspaceAuthorizationContext
from iam.dependencies import (
    get_current_workspace_context,
    get_workspace_context,
    get_workspace_service,
)
from iam.presentation.models import WorkspaceResponse
from iam.presentation.workspaces.models import (
    CreateMemberRequest,
    UpdateMemberRequest,
    UpdateWorkspaceRequest,
    WorkspaceDetailResponse,
    WorkspaceListResponse,
    WorkspaceMemberListResponse,
    WorkspaceMemberResponse,
)

router = APIRouter(
    prefix="/workspaces",
    tags=["workspaces"],
)


@router.get(
    "",
    response_model=WorkspaceListResponse,
    summary="List workspaces",
    description="""
List the workspaces visible to the caller.

Super admins see every workspace. Other callers see the workspaces they
manage or belong to; a first workspace is provisioned for callers from an
allowed domain who have none.
""",
    responses={
        200: {"description": "Workspaces listed"},
        401: {"description": "Authentication required"},
        403: {"description": "Account deactivated"},
    },
)
async def list_workspaces(
    context: Annotated[WorkspaceAuthorizationContext, Depends(get_workspace_context)],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
) -> WorkspaceListResponse:
    """List workspaces visible to the caller."""
    workspaces = await service.list_workspaces(context)
    return WorkspaceListResponse(
        workspaces=[WorkspaceResponse.from_domain(ws) for ws in workspaces],
        count=len(workspaces),
        is_super_admin=context.is_super_admin,
    )


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceDetailResponse,
    summary="Get workspace by ID",
    responses={
        200: {"description": "Workspace found and returned"},
        401: {"description": "Authentication required"},
        403: {"description": "Workspace not found or access denied"},
    },
)
async def get_workspace(
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_current_workspace_context)
    ],
) -> WorkspaceDetailResponse:
    """Get a workspace the caller has access to."""
    return WorkspaceDetailResponse.from_context(context)


@router.put(
    "/{workspace_id}",
    response_model=WorkspaceResponse,
    summary="Update workspace settings",
    description="""
Update the manager name, allowed domains or status of a workspace.

Only the workspace manager or a super admin may update a workspace. The
manager email cannot be changed.
""",
    responses={
        200: {"description": "Workspace updated"},
        401: {"description": "Authentication required"},
        403: {"description": "Manager access required"},
    },
)
async def update_workspace(
    request: UpdateWorkspaceRequest,
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_current_workspace_context)
    ],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
) -> WorkspaceResponse:
    """Update workspace settings."""
    workspace = await service.update_workspace(
        context,
        manager_name=request.manager_name,
        allowed_domains=request.allowed_domains,
        status=request.status,
    )
    return WorkspaceResponse.from_domain(workspace)


@router.get(
    "/{workspace_id}/team",
    response_model=WorkspaceMemberListResponse,
    summary="List workspace members",
    description="""
List the explicit members of a workspace, ordered by email.

Any caller with access to the workspace may list its members. Removed
members are only included when `include_inactive` is set.
""",
    responses={
        200: {"description": "Members listed"},
        401: {"description": "Authentication required"},
        403: {"description": "Workspace not found or access denied"},
    },
)
async def list_workspace_members(
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_current_workspace_context)
    ],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
    include_inactive: Annotated[bool, Query()] = False,
) -> WorkspaceMemberListResponse:
    members = await service.list_members(context, include_inactive=include_inactive)
    return WorkspaceMemberListResponse(
        members=[WorkspaceMemberResponse.from_domain(m) for m in members],
        count=len(members),
    )


@router.post(
    "/{workspace_id}/team",
    status_code=status.HTTP_201_CREATED,
    response_model=WorkspaceMemberResponse,
    summary="Add workspace member",
    description="""
Add an explicit member to a workspace.

Only the workspace manager or a super admin may add members, and the
email's domain must be one of the workspace's allowed domains. Adding a
previously removed member restores them with the new details.
""",
    responses={
        201: {"description": "Member added"},
        400: {"description": "Email domain not allowed (INVALID_DOMAIN)"},
        401: {"description": "Authentication required"},
        403: {"description": "Manager access required"},
        409: {"description": "Already a member (MEMBER_ALREADY_EXISTS)"},
    },
)
async def add_workspace_member(
    request: CreateMemberRequest,
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_current_workspace_context)
    ],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
) -> WorkspaceMemberResponse:
    """Add a member to the workspace."""
    member = await service.add_member(
        context,
        email=request.email,
        name=request.name,
        first_name=request.first_name,
        role=request.role,
    )
    return WorkspaceMemberResponse.from_domain(member)


@router.put(
    "/{workspace_id}/team/{member_id}",
    response_model=WorkspaceMemberResponse,
    summary="Update workspace member",
    responses={
        200: {"description": "Member updated"},
        401: {"description": "Authentication required"},
        403: {"description": "Manager access required"},
        404: {"description": "Member not found (MEMBER_NOT_FOUND)"},
    },
)
async def update_workspace_member(
    member_id: str,
    request: UpdateMemberRequest,
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_current_workspace_context)
    ],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
) -> WorkspaceMemberResponse:
    """Change a member's name, role or active flag."""
    member = await service.update_member(
        context,
        member_id,
        name=request.name,
        first_name=request.first_name,
        role=request.role,
        active=request.active,
    )
    return WorkspaceMemberResponse.from_domain(member)


@router.delete(
    "/{workspace_id}/team/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove workspace member",
    description="""
Remove a member from a workspace.

The membership is deactivated rather than deleted, so the member can be
restored later by adding them again.
""",
    responses={
        204: {"description": "Member removed"},
        401: {"description": "Authentication required"},
        403: {"description": "Manager access required"},
        404: {"description": "Member not found (MEMBER_NOT_FOUND)"},
    },
)
async def remove_workspace_member(
    member_id: str,
    context: Annotated[
        WorkspaceAuthorizationContext, Depends(get_current_workspace_context)
    ],
    service: Annotated[WorkspaceService, Depends(get_workspace_service)],
) -> None:
    await service.remove_member(context, member_id)
