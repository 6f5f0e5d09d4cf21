"""FastAPI providers for IAM repositories and application services.

All providers share the request's session through FastAPI's per-request
dependency caching.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.authorization import AuthorizationResolver
from iam.application.observability import AuthenticationProbe
from iam.application.services import (
    AuthenticationService,
    IdentityResolver,
    TeamMemberService,
    WorkspaceProvisioner,
    WorkspaceService,
)
from iam.dependencies.authentication import (
    get_authentication_probe,
    get_authorization_resolver,
    get_token_verifier,
)
from iam.infrastructure.team_member_repository import TeamMemberRepository
from iam.infrastructure.workspace_repository import WorkspaceRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.auth import TokenVerifier


def get_team_member_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> TeamMemberRepository:
    """Get TeamMemberRepository instance.

    Args:
        session: Async database session

    Returns:
        TeamMemberRepository instance
    """
    return TeamMemberRepository(session=session)


def get_workspace_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> WorkspaceRepository:
    """Get WorkspaceRepository instance.

    Args:
        session: Async database session

    Returns:
        WorkspaceRepository instance
    """
    return WorkspaceRepository(session=session)


def get_authentication_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    token_verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    authorization_resolver: Annotated[
        AuthorizationResolver, Depends(get_authorization_resolver)
    ],
    team_member_repo: Annotated[
        TeamMemberRepository, Depends(get_team_member_repository)
    ],
    workspace_repo: Annotated[WorkspaceRepository, Depends(get_workspace_repository)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> AuthenticationService:
    """Get AuthenticationService instance wired for the current request."""
    return AuthenticationService(
        session=session,
        token_verifier=token_verifier,
        identity_resolver=IdentityResolver(team_member_repository=team_member_repo),
        workspace_provisioner=WorkspaceProvisioner(
            workspace_repository=workspace_repo
        ),
        authorization_resolver=authorization_resolver,
        workspace_repository=workspace_repo,
        probe=probe,
    )


def get_workspace_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    workspace_repo: Annotated[WorkspaceRepository, Depends(get_workspace_repository)],
) -> WorkspaceService:
    """Get WorkspaceService instance."""
    return WorkspaceService(session=session, workspace_repository=workspace_repo)


def get_team_member_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    team_member_repo: Annotated[
        TeamMemberRepository, Depends(get_team_member_repository)
    ],
) -> TeamMemberService:
    """Get TeamMemberService instance."""
    return TeamMemberService(session=session, team_member_repository=team_member_repo)
