"""FastAPI dependency providers for the IAM bounded context."""

from iam.dependencies.authentication import (
    get_authentication_probe,
    get_authorization_config,
    get_authorization_resolver,
    get_token_verifier,
)
from iam.dependencies.context import (
    get_admin_context,
    get_authorization_context,
    get_current_workspace_context,
    get_super_admin_context,
    get_workspace_context,
)
from iam.dependencies.services import (
    get_authentication_service,
    get_team_member_repository,
    get_team_member_service,
    get_workspace_repository,
    get_workspace_service,
)

__all__ = [
    "get_admin_context",
    "get_authentication_probe",
    "get_authentication_service",
    "get_authorization_config",
    "get_authorization_context",
    "get_authorization_resolver",
    "get_current_workspace_context",
    "get_super_admin_context",
    "get_team_member_repository",
    "get_team_member_service",
    "get_token_verifier",
    "get_workspace_context",
    "get_workspace_repository",
    "get_workspace_service",
]
