"""Authentication pipeline for IAM bounded context.

Orchestrates token verification, identity resolution, workspace
provisioning and privilege computation for one request. Token
verification strictly precedes every store access; the store work of a
request runs in a single transaction.
"""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.access_gate import (
    require_active_team_member,
    require_workspace_access,
)
from iam.application.authorization import AuthorizationResolver
from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services.identity_resolver import IdentityResolver
from iam.application.services.workspace_provisioner import WorkspaceProvisioner
from iam.application.value_objects import (
    AuthenticatedUser,
    AuthorizationContext,
    LoginVerification,
    WorkspaceAuthorizationContext,
)
from iam.domain.aggregates import TeamMember
from iam.domain.value_objects import WorkspaceId
from iam.ports.repositories import IWorkspaceRepository
from shared_kernel.auth.bearer import extract_bearer_token
from shared_kernel.auth.errors import AuthError, AuthErrorCode, ForbiddenError
from shared_kernel.auth.token_verifier import TokenVerifier, VerifiedIdentity


class AuthenticationService:
    """Application service resolving the authorization context of a request.

    Every failure surfaces as an AuthError subclass and is terminal for the
    request; nothing is retried.
    """

    def __init__(
        self,
        session: AsyncSession,
        token_verifier: TokenVerifier,
        identity_resolver: IdentityResolver,
        workspace_provisioner: WorkspaceProvisioner,
        authorization_resolver: AuthorizationResolver,
        workspace_repository: IWorkspaceRepository,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize AuthenticationService with dependencies.

        Args:
            session: Database session for transaction management
            token_verifier: Verifies bearer tokens with the identity provider
            identity_resolver: Maps verified identities to team members
            workspace_provisioner: Lazily provisions first workspaces
            authorization_resolver: Computes privilege flags
            workspace_repository: Repository for workspace lookups
            probe: Optional domain probe for observability
        """
        self._session = session
        self._token_verifier = token_verifier
        self._identity_resolver = identity_resolver
        self._workspace_provisioner = workspace_provisioner
        self._authorization = authorization_resolver
        self._workspace_repository = workspace_repository
        self._probe = probe or DefaultAuthenticationProbe()

    async def authenticate(self, authorization: str | None) -> AuthorizationContext:
        """Single-tenant pipeline.

        Args:
            authorization: Raw Authorization header value

        Returns:
            AuthorizationContext with the legacy admin flag

        Raises:
            UnauthorizedError: If the identity cannot be established
            ForbiddenError: ACCOUNT_DEACTIVATED
        """
        try:
            identity = await self._verify_header(authorization)
            async with self._session.begin():
                member = await self._resolve_active_member(identity)

            context = AuthorizationContext(
                user=self._to_user(identity),
                team_member=member,
                is_admin=self._authorization.is_admin(member),
            )
        except AuthError as e:
            self._probe.authentication_failed(code=e.code, reason=e.message)
            raise

        self._probe.user_authenticated(
            email=context.user.email, is_admin=context.is_admin
        )
        return context

    async def authenticate_workspace(
        self, authorization: str | None
    ) -> WorkspaceAuthorizationContext:
        """Multi-tenant pipeline without a target workspace.

        Resolves the caller's workspace set, provisioning a first workspace
        when eligible.
        """
        try:
            identity = await self._verify_header(authorization)
            async with self._session.begin():
                context = await self._resolve_workspace_context(identity)
        except AuthError as e:
            self._probe.authentication_failed(code=e.code, reason=e.message)
            raise

        self._probe.workspace_user_authenticated(
            email=context.user.email,
            is_super_admin=context.is_super_admin,
            workspace_count=len(context.workspaces),
        )
        return context

    async def authenticate_with_workspace(
        self, authorization: str | None, workspace_id: str
    ) -> WorkspaceAuthorizationContext:
        """Multi-tenant pipeline targeting a specific workspace.

        Raises:
            ForbiddenError: WORKSPACE_NOT_FOUND if the workspace does not
                exist, WORKSPACE_ACCESS_DENIED if access is not granted
        """
        try:
            identity = await self._verify_header(authorization)
            async with self._session.begin():
                context = await self._resolve_workspace_context(identity)

                workspace = None
                if workspace_id.strip():
                    workspace = await self._workspace_repository.get_by_id(
                        WorkspaceId(workspace_id)
                    )
                if workspace is None:
                    raise ForbiddenError(
                        "Workspace not found", AuthErrorCode.WORKSPACE_NOT_FOUND
                    )
                require_workspace_access(context, workspace)

                member = await self._workspace_repository.get_member(
                    workspace.id, context.user.email
                )
                context = replace(
                    context, current_workspace=workspace, current_member=member
                )
        except AuthError as e:
            self._probe.authentication_failed(code=e.code, reason=e.message)
            raise

        self._probe.workspace_user_authenticated(
            email=context.user.email,
            is_super_admin=context.is_super_admin,
            workspace_count=len(context.workspaces),
            workspace_id=workspace_id,
        )
        return context

    async def verify_login(self, token: str) -> LoginVerification:
        """Verify a sign-in token and report both privilege tiers.

        Args:
            token: The raw token posted by the client

        Returns:
            LoginVerification with the resolved member and workspace set
        """
        try:
            identity = await self._verify_token(token)
            async with self._session.begin():
                member = await self._resolve_active_member(identity)
                user = self._to_user(identity)
                workspaces = await self._workspace_provisioner.ensure_workspace(
                    email=user.email,
                    name=user.name,
                    allowed_domains=self._authorization.config.allowed_domains,
                )
        except AuthError as e:
            self._probe.authentication_failed(code=e.code, reason=e.message)
            raise

        result = LoginVerification(
            user=user,
            team_member=member,
            is_admin=self._authorization.is_admin(member),
            is_super_admin=self._authorization.is_super_admin(user.email),
            workspaces=tuple(workspaces),
        )
        self._probe.login_verified(email=user.email, workspace_count=len(workspaces))
        return result

    async def _verify_header(self, authorization: str | None) -> VerifiedIdentity:
        token = extract_bearer_token(authorization)
        return await self._verify_token(token)

    async def _verify_token(self, token: str) -> VerifiedIdentity:
        return await self._token_verifier.verify(
            token, self._authorization.config.google_client_id
        )

    async def _resolve_active_member(self, identity: VerifiedIdentity) -> TeamMember:
        member = await self._identity_resolver.find_or_create_team_member(identity)
        require_active_team_member(member)
        return member

    async def _resolve_workspace_context(
        self, identity: VerifiedIdentity
    ) -> WorkspaceAuthorizationContext:
        member = await self._resolve_active_member(identity)
        user = self._to_user(identity)
        workspaces = await self._workspace_provisioner.ensure_workspace(
            email=user.email,
            name=user.name,
            allowed_domains=self._authorization.config.allowed_domains,
        )
        return WorkspaceAuthorizationContext(
            user=user,
            team_member=member,
            is_super_admin=self._authorization.is_super_admin(user.email),
            workspaces=tuple(workspaces),
        )

    @staticmethod
    def _to_user(identity: VerifiedIdentity) -> AuthenticatedUser:
        return AuthenticatedUser(
            email=identity.email,
            name=identity.name,
            picture=identity.picture,
            given_name=identity.given_name,
        )
