"""Guard checks over an already-resolved authorization context.

Each guard comes in two shapes:

- ``check_*`` returns an immutable AccessDecision and never raises.
- ``require_*`` raises the decision's error when access is denied.

Guards are side-effect free. ``require_active_team_member`` must be
evaluated before any privilege guard, since deactivation overrides
admin and manager status.
"""

from __future__ import annotations

from dataclasses import dataclass

from iam.application.authorization import (
    workspace_access_granted,
    workspace_manager_granted,
)
from iam.application.value_objects import (
    AuthorizationContext,
    WorkspaceAuthorizationContext,
)
from iam.domain.aggregates import TeamMember, Workspace
from shared_kernel.auth.errors import (
    AuthError,
    AuthErrorCode,
    ForbiddenError,
    InternalAuthError,
)


@dataclass(frozen=True)
class AccessDecision:
    """Result of a guard check.

    Attributes:
        allowed: Whether the check passed
        error: The error a denial raises (None when allowed)
    """

    allowed: bool
    error: AuthError | None = None

    @classmethod
    def grant(cls) -> AccessDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, error: AuthError) -> AccessDecision:
        return cls(allowed=False, error=error)

    def enforce(self) -> None:
        """Raise the denial error, or return if access was granted."""
        if not self.allowed and self.error is not None:
            raise self.error


def check_active_team_member(team_member: TeamMember) -> AccessDecision:
    if not team_member.active:
        return AccessDecision.deny(
            ForbiddenError(
                "Your account has been deactivated",
                AuthErrorCode.ACCOUNT_DEACTIVATED,
            )
        )
    return AccessDecision.grant()


def require_active_team_member(team_member: TeamMember) -> None:
    """Raise ForbiddenError(ACCOUNT_DEACTIVATED) for deactivated members."""
    check_active_team_member(team_member).enforce()


def check_admin(context: AuthorizationContext) -> AccessDecision:
    if not context.is_admin:
        return AccessDecision.deny(
            ForbiddenError("Admin access required", AuthErrorCode.ADMIN_REQUIRED)
        )
    return AccessDecision.grant()


def require_admin(context: AuthorizationContext) -> None:
    """Raise ForbiddenError(ADMIN_REQUIRED) unless the caller is an admin."""
    check_admin(context).enforce()


def check_super_admin(context: WorkspaceAuthorizationContext) -> AccessDecision:
    if not context.is_super_admin:
        return AccessDecision.deny(
            ForbiddenError(
                "Super admin access required", AuthErrorCode.SUPER_ADMIN_REQUIRED
            )
        )
    return AccessDecision.grant()


def require_super_admin(context: WorkspaceAuthorizationContext) -> None:
    """Raise ForbiddenError(SUPER_ADMIN_REQUIRED) unless the caller is a super admin."""
    check_super_admin(context).enforce()


def check_workspace_access(
    context: WorkspaceAuthorizationContext, workspace: Workspace
) -> AccessDecision:
    granted = workspace_access_granted(
        email=context.user.email,
        is_super_admin=context.is_super_admin,
        workspace=workspace,
        reachable_workspace_ids=context.workspace_ids(),
    )
    if not granted:
        return AccessDecision.deny(
            ForbiddenError(
                "You do not have access to this workspace",
                AuthErrorCode.WORKSPACE_ACCESS_DENIED,
            )
        )
    return AccessDecision.grant()


def require_workspace_access(
    context: WorkspaceAuthorizationContext, workspace: Workspace
) -> None:
    """Raise ForbiddenError(WORKSPACE_ACCESS_DENIED) if access is not granted."""
    check_workspace_access(context, workspace).enforce()


def check_workspace_manager(context: WorkspaceAuthorizationContext) -> AccessDecision:
    """Check manager privilege over the context's current workspace.

    A missing current workspace means the pipeline ran out of order, so
    the denial is an InternalAuthError rather than a Forbidden one.
    """
    workspace = context.current_workspace
    if workspace is None:
        return AccessDecision.deny(InternalAuthError("No workspace context"))
    if not workspace_manager_granted(
        context.user.email, context.is_super_admin, workspace
    ):
        return AccessDecision.deny(
            ForbiddenError(
                "Workspace manager access required", AuthErrorCode.MANAGER_REQUIRED
            )
        )
    return AccessDecision.grant()


def require_workspace_manager(context: WorkspaceAuthorizationContext) -> None:
    check_workspace_manager(context).enforce()
