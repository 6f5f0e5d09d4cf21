"""FastAPI dependencies producing the authorization context of a request.

Routes depend on one of these instead of reading the Authorization header
themselves. Failures propagate as AuthError subclasses and are rendered by
the application's exception handlers before the route body runs.
"""

from typing import Annotated

from fastapi import Depends, Header

from iam.application.access_gate import require_admin, require_super_admin
from iam.application.services import AuthenticationService
from iam.application.value_objects import (
    AuthorizationContext,
    WorkspaceAuthorizationContext,
)
from iam.dependencies.services import get_authentication_service


async def get_authorization_context(
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthorizationContext:
    """Single-tenant authorization context of the caller."""
    return await service.authenticate(authorization)


async def get_workspace_context(
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> WorkspaceAuthorizationContext:
    """Multi-tenant authorization context without a target workspace."""
    return await service.authenticate_workspace(authorization)


async def get_current_workspace_context(
    workspace_id: str,
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> WorkspaceAuthorizationContext:
    """Multi-tenant authorization context targeting the ``workspace_id`` path parameter."""
    return await service.authenticate_with_workspace(authorization, workspace_id)


async def get_admin_context(
    context: Annotated[AuthorizationContext, Depends(get_authorization_context)],
) -> AuthorizationContext:
    """Authorization context of a caller holding the admin flag."""
    require_admin(context)
    return context


async def get_super_admin_context(
    context: Annotated[WorkspaceAuthorizationContext, Depends(get_workspace_context)],
) -> WorkspaceAuthorizationContext:
    """Authorization context of a super admin."""
    require_super_admin(context)
    return context
