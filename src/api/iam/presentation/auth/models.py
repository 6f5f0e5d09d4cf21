"""Request and response models for authentication API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.application.value_objects import AuthorizationContext, LoginVerification
from iam.presentation.models import TeamMemberResponse, UserResponse, WorkspaceResponse


class VerifyLoginRequest(BaseModel):
    """Request to verify a sign-in token."""

    token: str = Field(..., min_length=1, description="ID token from the identity provider")


class VerifyLoginResponse(BaseModel):
    """Outcome of a sign-in verification.

    Both privilege flags are reported; they are independent.
    """

    user: UserResponse
    team_member: TeamMemberResponse
    is_admin: bool = Field(..., description="Single-tenant admin flag")
    is_super_admin: bool = Field(..., description="Multi-tenant super admin flag")
    workspaces: list[WorkspaceResponse]

    @classmethod
    def from_domain(cls, result: LoginVerification) -> VerifyLoginResponse:
        return cls(
            user=UserResponse.from_domain(result.user),
            team_member=TeamMemberResponse.from_domain(result.team_member),
            is_admin=result.is_admin,
            is_super_admin=result.is_super_admin,
            workspaces=[WorkspaceResponse.from_domain(ws) for ws in result.workspaces],
        )


class MeResponse(BaseModel):
    """The authenticated caller."""

    user: UserResponse
    team_member: TeamMemberResponse
    is_admin: bool

    @classmethod
    def from_domain(cls, context: AuthorizationContext) -> MeResponse:
        return cls(
            user=UserResponse.from_domain(context.user),
            team_member=TeamMemberResponse.from_domain(context.team_member),
            is_admin=context.is_admin,
        )
