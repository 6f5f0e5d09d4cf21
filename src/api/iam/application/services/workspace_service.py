"""Workspace application service for IAM bounded context.

Lists and updates workspaces, and manages their explicit members, on
behalf of a caller whose context was already resolved by the
authentication pipeline. Explicit members are what the membership branch
of the workspace access rule reads.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.access_gate import require_workspace_manager
from iam.application.observability import (
    DefaultWorkspaceServiceProbe,
    WorkspaceServiceProbe,
)
from iam.application.value_objects import WorkspaceAuthorizationContext
from iam.domain.aggregates import Workspace, WorkspaceMember
from iam.domain.value_objects import (
    WORKSPACE_MEMBER_ID_PREFIX,
    WorkspaceMemberId,
    WorkspaceMemberRole,
    WorkspaceStatus,
    canonical_email,
    email_domain,
)
from iam.ports.exceptions import DuplicateWorkspaceMemberError
from iam.ports.repositories import IWorkspaceRepository
from shared_kernel.auth.errors import (
    AuthErrorCode,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalAuthError,
    NotFoundError,
)
from shared_kernel.id_generator import IdGenerator, UlidIdGenerator
from shared_kernel.observability_context import ObservationContext


class WorkspaceService:
    """Application service for workspace management."""

    def __init__(
        self,
        session: AsyncSession,
        workspace_repository: IWorkspaceRepository,
        id_generator: IdGenerator | None = None,
        probe: WorkspaceServiceProbe | None = None,
    ):
        self._session = session
        self._workspace_repository = workspace_repository
        self._id_generator = id_generator or UlidIdGenerator()
        self._probe = probe or DefaultWorkspaceServiceProbe()

    async def list_workspaces(
        self, context: WorkspaceAuthorizationContext
    ) -> list[Workspace]:
        """List the workspaces visible to the caller.

        Super admins see every workspace; everyone else sees the set
        resolved for them during authentication.
        """
        if not context.is_super_admin:
            return list(context.workspaces)

        async with self._session.begin():
            return await self._workspace_repository.list_all()

    async def update_workspace(
        self,
        context: WorkspaceAuthorizationContext,
        manager_name: str | None = None,
        allowed_domains: list[str] | None = None,
        status: WorkspaceStatus | None = None,
    ) -> Workspace:
        """Update the current workspace's settings.

        The manager email cannot be changed.

        Args:
            context: Context with the target workspace resolved
            manager_name: New manager display name
            allowed_domains: New domain allow-list
            status: New lifecycle status

        Returns:
            The updated Workspace

        Raises:
            InternalAuthError: If no workspace was resolved in context
            ForbiddenError: MANAGER_REQUIRED, or WORKSPACE_NOT_FOUND if the
                workspace vanished since authentication
        """
        current = self._current_workspace(context)
        require_workspace_manager(context)

        async with self._session.begin():
            stored = await self._workspace_repository.get_by_id(current.id)
            if stored is None:
                raise ForbiddenError(
                    "Workspace not found", AuthErrorCode.WORKSPACE_NOT_FOUND
                )

            updated = stored.update(
                manager_name=manager_name,
                allowed_domains=allowed_domains,
                status=status,
            )
            await self._workspace_repository.save(updated)

        self._probe_for(context).workspace_updated(workspace_id=updated.id.value)
        return updated

    async def list_members(
        self, context: WorkspaceAuthorizationContext, include_inactive: bool = False
    ) -> list[WorkspaceMember]:
        """List explicit members of the current workspace.

        Open to anyone who passed the workspace access rule.
        """
        workspace = self._current_workspace(context)

        async with self._session.begin():
            members = await self._workspace_repository.list_members(
                workspace.id, include_inactive=include_inactive
            )

        self._probe_for(context).members_listed(
            workspace_id=workspace.id.value, count=len(members)
        )
        return members

    async def add_member(
        self,
        context: WorkspaceAuthorizationContext,
        email: str,
        name: str,
        first_name: str | None = None,
        role: WorkspaceMemberRole = WorkspaceMemberRole.MEMBER,
    ) -> WorkspaceMember:
        """Add an explicit member to the current workspace.

        A previously removed member is reactivated with the new details
        instead of getting a second row.

        Raises:
            ForbiddenError: MANAGER_REQUIRED
            BadRequestError: INVALID_DOMAIN if the email's domain is not on
                the workspace's allow-list
            ConflictError: MEMBER_ALREADY_EXISTS if the email is an active
                member already
        """
        workspace = self._current_workspace(context)
        require_workspace_manager(context)
        probe = self._probe_for(context)
        email = canonical_email(email)

        if not workspace.allows_domain_of(email):
            probe.member_rejected(
                workspace_id=workspace.id.value, email=email, reason="domain_not_allowed"
            )
            raise BadRequestError(
                f"Email domain {email_domain(email) or '(none)'} is not allowed. "
                f"Allowed domains: {', '.join(workspace.allowed_domains)}",
                AuthErrorCode.INVALID_DOMAIN,
            )

        async with self._session.begin():
            existing = await self._workspace_repository.get_member(workspace.id, email)
            if existing is not None and existing.active:
                probe.member_rejected(
                    workspace_id=workspace.id.value, email=email, reason="already_member"
                )
                raise ConflictError(f"{email} is already a member of this workspace")

            if existing is not None:
                member = existing.with_changes(
                    name=name, first_name=first_name, role=role, active=True
                )
                await self._workspace_repository.save_member(member)
                probe.member_reactivated(
                    workspace_id=workspace.id.value, member_id=member.id.value
                )
                return member

            member = WorkspaceMember.create(
                member_id=WorkspaceMemberId(
                    self._id_generator.new_id(WORKSPACE_MEMBER_ID_PREFIX)
                ),
                workspace_id=workspace.id,
                email=email,
                name=name,
                first_name=first_name,
                role=role,
            )
            try:
                await self._workspace_repository.add_member(member)
            except DuplicateWorkspaceMemberError as e:
                probe.member_rejected(
                    workspace_id=workspace.id.value, email=email, reason="already_member"
                )
                raise ConflictError(
                    f"{email} is already a member of this workspace"
                ) from e

        probe.member_added(
            workspace_id=workspace.id.value, member_id=member.id.value, email=email
        )
        return member

    async def update_member(
        self,
        context: WorkspaceAuthorizationContext,
        member_id: str,
        name: str | None = None,
        first_name: str | None = None,
        role: WorkspaceMemberRole | None = None,
        active: bool | None = None,
    ) -> WorkspaceMember:
        """Change an explicit member of the current workspace.

        Raises:
            ForbiddenError: MANAGER_REQUIRED
            NotFoundError: MEMBER_NOT_FOUND if the id is not a member of
                the current workspace
        """
        workspace = self._current_workspace(context)
        require_workspace_manager(context)

        async with self._session.begin():
            member = await self._get_member(workspace, member_id)
            updated = member.with_changes(
                name=name, first_name=first_name, role=role, active=active
            )
            await self._workspace_repository.save_member(updated)

        self._probe_for(context).member_updated(
            workspace_id=workspace.id.value, member_id=updated.id.value
        )
        return updated

    async def remove_member(
        self, context: WorkspaceAuthorizationContext, member_id: str
    ) -> None:
        """Deactivate an explicit member of the current workspace.

        Raises:
            ForbiddenError: MANAGER_REQUIRED
            NotFoundError: MEMBER_NOT_FOUND
        """
        workspace = self._current_workspace(context)
        require_workspace_manager(context)

        async with self._session.begin():
            member = await self._get_member(workspace, member_id)
            await self._workspace_repository.save_member(member.deactivate())

        self._probe_for(context).member_removed(
            workspace_id=workspace.id.value, member_id=member.id.value
        )

    async def _get_member(self, workspace: Workspace, member_id: str) -> WorkspaceMember:
        member = None
        if member_id.strip():
            member = await self._workspace_repository.get_member_by_id(
                workspace.id, WorkspaceMemberId(member_id)
            )
        if member is None:
            raise NotFoundError("Member not found", AuthErrorCode.MEMBER_NOT_FOUND)
        return member

    @staticmethod
    def _current_workspace(context: WorkspaceAuthorizationContext) -> Workspace:
        if context.current_workspace is None:
            raise InternalAuthError("No workspace context")
        return context.current_workspace

    def _probe_for(self, context: WorkspaceAuthorizationContext) -> WorkspaceServiceProbe:
        return self._probe.with_context(
            ObservationContext(caller_email=context.user.email)
        )
