"""PostgreSQL implementation of IWorkspaceRepository.

Repositories never commit: the calling service owns the transaction.
"""

from __future__ import annotations

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Workspace, WorkspaceMember
from iam.domain.value_objects import (
    WorkspaceId,
    WorkspaceMemberId,
    WorkspaceMemberRole,
    WorkspaceStatus,
    canonical_email,
)
from iam.infrastructure.models import WorkspaceMemberModel, WorkspaceModel
from iam.infrastructure.observability import (
    DefaultWorkspaceRepositoryProbe,
    WorkspaceRepositoryProbe,
)
from iam.ports.exceptions import (
    DuplicateWorkspaceManagerError,
    DuplicateWorkspaceMemberError,
)
from iam.ports.repositories import IWorkspaceRepository

MANAGER_UNIQUE_INDEX = "ix_workspaces_manager_email"
MEMBER_UNIQUE_INDEX = "ix_workspace_members_workspace_email"


class WorkspaceRepository(IWorkspaceRepository):
    """PostgreSQL-backed repository for Workspaces and their explicit memberships."""

    def __init__(
        self, session: AsyncSession, probe: WorkspaceRepositoryProbe | None = None
    ) -> None:
        self._session = session
        self._probe = probe or DefaultWorkspaceRepositoryProbe()

    async def get_by_id(self, workspace_id: WorkspaceId) -> Workspace | None:
        stmt = select(WorkspaceModel).where(WorkspaceModel.id == workspace_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.workspace_not_found(workspace_id.value)
            return None

        return self._to_domain(model)

    async def list_for_email(self, email: str) -> list[Workspace]:
        """List workspaces the email manages or holds an active membership in."""
        email = canonical_email(email)
        member_of = select(WorkspaceMemberModel.workspace_id).where(
            WorkspaceMemberModel.email == email,
            WorkspaceMemberModel.active.is_(True),
        )
        stmt = (
            select(WorkspaceModel)
            .where(
                or_(
                    WorkspaceModel.manager_email == email,
                    WorkspaceModel.id.in_(member_of),
                )
            )
            .order_by(WorkspaceModel.created_at)
        )
        result = await self._session.execute(stmt)
        workspaces = [self._to_domain(model) for model in result.scalars().all()]
        self._probe.workspaces_listed(email, len(workspaces))
        return workspaces

    async def list_all(self) -> list[Workspace]:
        stmt = select(WorkspaceModel).order_by(WorkspaceModel.created_at)
        result = await self._session.execute(stmt)
        workspaces = [self._to_domain(model) for model in result.scalars().all()]
        self._probe.workspaces_listed(None, len(workspaces))
        return workspaces

    async def add(self, workspace: Workspace) -> None:
        """Insert a new workspace.

        Raises:
            DuplicateWorkspaceManagerError: If the manager already has one
        """
        try:
            async with self._session.begin_nested():
                self._session.add(
                    WorkspaceModel(
                        id=workspace.id.value,
                        manager_email=workspace.manager_email,
                        manager_name=workspace.manager_name,
                        allowed_domains=list(workspace.allowed_domains),
                        status=workspace.status.value,
                        created_at=workspace.created_at,
                        updated_at=workspace.updated_at,
                    )
                )
                # Flush inside the savepoint to surface constraint violations
                await self._session.flush()
        except IntegrityError as e:
            if MANAGER_UNIQUE_INDEX in str(e):
                self._probe.duplicate_workspace_manager(workspace.manager_email)
                raise DuplicateWorkspaceManagerError(
                    f"A workspace managed by '{workspace.manager_email}' already exists"
                ) from e
            raise

        self._probe.workspace_added(workspace.id.value, workspace.manager_email)

    async def save(self, workspace: Workspace) -> None:
        """Persist the mutable settings of an existing workspace."""
        stmt = (
            update(WorkspaceModel)
            .where(WorkspaceModel.id == workspace.id.value)
            .values(
                manager_name=workspace.manager_name,
                allowed_domains=list(workspace.allowed_domains),
                status=workspace.status.value,
                updated_at=workspace.updated_at,
            )
        )
        await self._session.execute(stmt)
        self._probe.workspace_saved(workspace.id.value)

    async def get_member(
        self, workspace_id: WorkspaceId, email: str
    ) -> WorkspaceMember | None:
        stmt = select(WorkspaceMemberModel).where(
            WorkspaceMemberModel.workspace_id == workspace_id.value,
            WorkspaceMemberModel.email == canonical_email(email),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return None if model is None else self._member_to_domain(model)

    async def get_member_by_id(
        self, workspace_id: WorkspaceId, member_id: WorkspaceMemberId
    ) -> WorkspaceMember | None:
        stmt = select(WorkspaceMemberModel).where(
            WorkspaceMemberModel.workspace_id == workspace_id.value,
            WorkspaceMemberModel.id == member_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return None if model is None else self._member_to_domain(model)

    async def list_members(
        self, workspace_id: WorkspaceId, include_inactive: bool = False
    ) -> list[WorkspaceMember]:
        stmt = select(WorkspaceMemberModel).where(
            WorkspaceMemberModel.workspace_id == workspace_id.value
        )
        if not include_inactive:
            stmt = stmt.where(WorkspaceMemberModel.active.is_(True))
        stmt = stmt.order_by(WorkspaceMemberModel.email)
        result = await self._session.execute(stmt)
        return [self._member_to_domain(model) for model in result.scalars().all()]

    async def add_member(self, member: WorkspaceMember) -> None:
        """Insert a new membership.

        Raises:
            DuplicateWorkspaceMemberError: If the email already has a
                membership row in the workspace
        """
        try:
            async with self._session.begin_nested():
                self._session.add(
                    WorkspaceMemberModel(
                        id=member.id.value,
                        workspace_id=member.workspace_id.value,
                        email=member.email,
                        name=member.name,
                        first_name=member.first_name,
                        role=member.role.value,
                        active=member.active,
                        created_at=member.created_at,
                    )
                )
                await self._session.flush()
        except IntegrityError as e:
            if MEMBER_UNIQUE_INDEX in str(e):
                self._probe.duplicate_workspace_member(
                    member.workspace_id.value, member.email
                )
                raise DuplicateWorkspaceMemberError(
                    f"'{member.email}' is already a member of "
                    f"workspace '{member.workspace_id}'"
                ) from e
            raise

        self._probe.workspace_member_added(member.id.value, member.workspace_id.value)

    async def save_member(self, member: WorkspaceMember) -> None:
        stmt = (
            update(WorkspaceMemberModel)
            .where(WorkspaceMemberModel.id == member.id.value)
            .values(
                name=member.name,
                first_name=member.first_name,
                role=member.role.value,
                active=member.active,
            )
        )
        await self._session.execute(stmt)
        self._probe.workspace_member_saved(member.id.value)

    @staticmethod
    def _member_to_domain(model: WorkspaceMemberModel) -> WorkspaceMember:
        return WorkspaceMember(
            id=WorkspaceMemberId(value=model.id),
            workspace_id=WorkspaceId(value=model.workspace_id),
            email=model.email,
            name=model.name,
            first_name=model.first_name,
            role=WorkspaceMemberRole(model.role),
            active=model.active,
            created_at=model.created_at,
        )

    @staticmethod
    def _to_domain(model: WorkspaceModel) -> Workspace:
        return Workspace(
            id=WorkspaceId(value=model.id),
            manager_email=model.manager_email,
            manager_name=model.manager_name,
            allowed_domains=tuple(model.allowed_domains or ()),
            status=WorkspaceStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
