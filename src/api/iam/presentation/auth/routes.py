"""Authentication routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from iam.application.services import AuthenticationService
from iam.application.value_objects import AuthorizationContext
from iam.dependencies import get_authentication_service, get_authorization_context
from iam.presentation.auth.models import (
    MeResponse,
    VerifyLoginRequest,
    VerifyLoginResponse,
)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post(
    "/verify",
    response_model=VerifyLoginResponse,
    summary="Verify a sign-in token",
    description="""
Verify an ID token issued by the identity provider.

Creates the caller's team member record on first sign-in and, for callers
from an allowed domain with no workspace yet, provisions their workspace.
""",
    responses={
        200: {"description": "Token verified"},
        401: {"description": "Token invalid, expired or for another audience"},
        403: {"description": "Account deactivated"},
    },
)
async def verify_login(
    request: VerifyLoginRequest,
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> VerifyLoginResponse:
    """Verify a sign-in token."""
    result = await service.verify_login(request.token)
    return VerifyLoginResponse.from_domain(result)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get the authenticated caller",
    responses={
        200: {"description": "Caller resolved"},
        401: {"description": "Authentication required"},
        403: {"description": "Account deactivated"},
    },
)
async def get_me(
    context: Annotated[AuthorizationContext, Depends(get_authorization_context)],
) -> MeResponse:
    """Return the authenticated caller."""
    return MeResponse.from_domain(context)
