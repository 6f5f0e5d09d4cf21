"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.authentication_service import AuthenticationService
from iam.application.services.identity_resolver import IdentityResolver
from iam.application.services.team_member_service import TeamMemberService
from iam.application.services.workspace_provisioner import WorkspaceProvisioner
from iam.application.services.workspace_service import WorkspaceService

__all__ = [
    "AuthenticationService",
    "IdentityResolver",
    "TeamMemberService",
    "WorkspaceProvisioner",
    "WorkspaceService",
]
