"""Unit tests for WorkspaceService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, create_autospec

import pytest

from iam.application.observability import WorkspaceServiceProbe
from iam.application.services import WorkspaceService
from iam.application.value_objects import (
    AuthenticatedUser,
    WorkspaceAuthorizationContext,
)
from iam.domain.aggregates import WorkspaceMember
from iam.domain.value_objects import (
    WorkspaceId,
    WorkspaceMemberId,
    WorkspaceMemberRole,
    WorkspaceStatus,
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
from shared_kernel.id_generator import IdGenerator
from shared_kernel.observability_context import ObservationContext

WORKSPACE_ID = "ws_01HN3XQ7K2XYZ123456789ABCD"


@pytest.fixture
def mock_repository():
    return create_autospec(IWorkspaceRepository, instance=True)


@pytest.fixture
def mock_probe():
    probe = create_autospec(WorkspaceServiceProbe, instance=True)
    probe.with_context.return_value = probe
    return probe


@pytest.fixture
def mock_id_generator():
    generator = create_autospec(IdGenerator, instance=True)
    generator.new_id.return_value = "wm_01HN3XQ7K2XYZ123456789NEW0"
    return generator


@pytest.fixture
def service(mock_session, mock_repository, mock_id_generator, mock_probe):
    """Create WorkspaceService with mock dependencies."""
    return WorkspaceService(
        session=mock_session,
        workspace_repository=mock_repository,
        id_generator=mock_id_generator,
        probe=mock_probe,
    )


@pytest.fixture
def make_context(make_team_member):
    def _make(
        email="alice@kubapay.com",
        is_super_admin=False,
        workspaces=(),
        current_workspace=None,
    ):
        return WorkspaceAuthorizationContext(
            user=AuthenticatedUser(email=email, name="Caller"),
            team_member=make_team_member(email=email),
            is_super_admin=is_super_admin,
            workspaces=tuple(workspaces),
            current_workspace=current_workspace,
        )

    return _make


@pytest.fixture
def make_member():
    def _make(
        email="bob@kubapay.com",
        active=True,
        member_id="wm_01HN3XQ7K2XYZ123456789BOB0",
        role=WorkspaceMemberRole.MEMBER,
    ):
        return WorkspaceMember(
            id=WorkspaceMemberId(member_id),
            workspace_id=WorkspaceId(WORKSPACE_ID),
            email=email,
            name="Bob Example",
            first_name="Bob",
            role=role,
            active=active,
            created_at=datetime.now(UTC),
        )

    return _make


@pytest.fixture
def manager_context(make_context, make_workspace):
    workspace = make_workspace(manager_email="alice@kubapay.com")
    return make_context(workspaces=[workspace], current_workspace=workspace)


class TestListWorkspaces:
    """Tests for list_workspaces."""

    @pytest.mark.asyncio
    async def test_regular_caller_sees_resolved_set(
        self, service, mock_repository, mock_session, make_context, make_workspace
    ):
        """Non-super-admins see the set resolved during authentication."""
        workspace = make_workspace()
        context = make_context(workspaces=[workspace])

        result = await service.list_workspaces(context)

        assert result == [workspace]
        mock_repository.list_all.assert_not_called()
        mock_session.begin.assert_not_called()

    @pytest.mark.asyncio
    async def test_super_admin_sees_all(
        self, service, mock_repository, make_context, make_workspace
    ):
        """Super admins see every workspace."""
        everything = [make_workspace(), make_workspace(workspace_id="ws_2")]
        mock_repository.list_all = AsyncMock(return_value=everything)

        result = await service.list_workspaces(make_context(is_super_admin=True))

        assert result == everything


class TestUpdateWorkspace:
    """Tests for update_workspace."""

    @pytest.mark.asyncio
    async def test_manager_updates(
        self, service, mock_repository, mock_probe, make_context, make_workspace
    ):
        """The manager can change name, domains and status."""
        workspace = make_workspace(manager_email="alice@kubapay.com")
        mock_repository.get_by_id = AsyncMock(return_value=workspace)
        mock_repository.save = AsyncMock()

        result = await service.update_workspace(
            make_context(current_workspace=workspace),
            manager_name="Alice A.",
            allowed_domains=["Voqa.com"],
            status=WorkspaceStatus.INACTIVE,
        )

        assert result.manager_name == "Alice A."
        assert result.allowed_domains == ("voqa.com",)
        assert result.status == WorkspaceStatus.INACTIVE
        assert result.manager_email == "alice@kubapay.com"
        mock_repository.save.assert_called_once_with(result)
        mock_probe.with_context.assert_called_with(
            ObservationContext(caller_email="alice@kubapay.com")
        )
        mock_probe.workspace_updated.assert_called_once_with(
            workspace_id=workspace.id.value
        )

    @pytest.mark.asyncio
    async def test_saves_updated_copy_not_stored_instance(
        self, service, mock_repository, make_context, make_workspace
    ):
        """The stored workspace is left untouched; its updated copy is saved."""
        stored = make_workspace(manager_email="alice@kubapay.com")
        mock_repository.get_by_id = AsyncMock(return_value=stored)
        mock_repository.save = AsyncMock()

        result = await service.update_workspace(
            make_context(current_workspace=stored), manager_name="Renamed"
        )

        saved = mock_repository.save.call_args.args[0]
        assert saved is result
        assert saved is not stored
        assert saved.manager_name == "Renamed"
        assert stored.manager_name == "Alice Example"

    @pytest.mark.asyncio
    async def test_non_manager_denied(
        self, service, mock_repository, make_context, make_workspace
    ):
        """Plain members cannot update."""
        workspace = make_workspace(manager_email="alice@kubapay.com")
        context = make_context(
            email="bob@kubapay.com",
            workspaces=[workspace],
            current_workspace=workspace,
        )

        with pytest.raises(ForbiddenError) as exc_info:
            await service.update_workspace(context, manager_name="Bob")

        assert exc_info.value.code == AuthErrorCode.MANAGER_REQUIRED
        mock_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_without_current_workspace(self, service, make_context):
        """Calling without a resolved workspace is an internal fault."""
        with pytest.raises(InternalAuthError):
            await service.update_workspace(make_context(), manager_name="X")

    @pytest.mark.asyncio
    async def test_workspace_vanished(
        self, service, mock_repository, make_context, make_workspace
    ):
        """A workspace deleted since authentication is WORKSPACE_NOT_FOUND."""
        workspace = make_workspace(manager_email="alice@kubapay.com")
        mock_repository.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(ForbiddenError) as exc_info:
            await service.update_workspace(
                make_context(current_workspace=workspace), manager_name="X"
            )

        assert exc_info.value.code == AuthErrorCode.WORKSPACE_NOT_FOUND


class TestListMembers:
    """Tests for list_members."""

    @pytest.mark.asyncio
    async def test_any_caller_with_access_can_list(
        self, service, mock_repository, mock_probe, make_context, make_workspace, make_member
    ):
        workspace = make_workspace(manager_email="alice@kubapay.com")
        context = make_context(email="bob@kubapay.com", current_workspace=workspace)
        members = [make_member()]
        mock_repository.list_members = AsyncMock(return_value=members)

        result = await service.list_members(context, include_inactive=True)

        assert result == members
        mock_repository.list_members.assert_called_once_with(
            workspace.id, include_inactive=True
        )
        mock_probe.members_listed.assert_called_once_with(
            workspace_id=WORKSPACE_ID, count=1
        )

    @pytest.mark.asyncio
    async def test_without_current_workspace(self, service, make_context):
        with pytest.raises(InternalAuthError):
            await service.list_members(make_context())


class TestAddMember:
    """Tests for add_member."""

    @pytest.mark.asyncio
    async def test_creates_member(
        self, service, mock_repository, mock_probe, mock_id_generator, manager_context
    ):
        """A new email on an allowed domain gets a fresh membership."""
        mock_repository.get_member = AsyncMock(return_value=None)
        mock_repository.add_member = AsyncMock()

        member = await service.add_member(
            manager_context,
            email=" Carol@KubaPay.com ",
            name="Carol Example",
            role=WorkspaceMemberRole.ADMIN,
        )

        assert member.email == "carol@kubapay.com"
        assert member.id.value == "wm_01HN3XQ7K2XYZ123456789NEW0"
        assert member.workspace_id.value == WORKSPACE_ID
        assert member.role == WorkspaceMemberRole.ADMIN
        assert member.active is True
        mock_id_generator.new_id.assert_called_once_with("wm")
        mock_repository.add_member.assert_called_once_with(member)
        mock_probe.member_added.assert_called_once_with(
            workspace_id=WORKSPACE_ID,
            member_id=member.id.value,
            email="carol@kubapay.com",
        )

    @pytest.mark.asyncio
    async def test_domain_not_allowed(
        self, service, mock_repository, mock_probe, mock_session, manager_context
    ):
        """Emails outside the workspace's allow-list are INVALID_DOMAIN."""
        with pytest.raises(BadRequestError) as exc_info:
            await service.add_member(
                manager_context, email="eve@elsewhere.org", name="Eve"
            )

        assert exc_info.value.code == AuthErrorCode.INVALID_DOMAIN
        assert exc_info.value.status_code == 400
        assert "elsewhere.org" in exc_info.value.message
        assert "kubapay.com" in exc_info.value.message
        mock_session.begin.assert_not_called()
        mock_repository.add_member.assert_not_called()
        mock_probe.member_rejected.assert_called_once_with(
            workspace_id=WORKSPACE_ID,
            email="eve@elsewhere.org",
            reason="domain_not_allowed",
        )

    @pytest.mark.asyncio
    async def test_non_manager_denied(
        self, service, mock_repository, make_context, make_workspace
    ):
        workspace = make_workspace(manager_email="alice@kubapay.com")
        context = make_context(email="bob@kubapay.com", current_workspace=workspace)

        with pytest.raises(ForbiddenError) as exc_info:
            await service.add_member(context, email="carol@kubapay.com", name="Carol")

        assert exc_info.value.code == AuthErrorCode.MANAGER_REQUIRED
        mock_repository.add_member.assert_not_called()

    @pytest.mark.asyncio
    async def test_super_admin_may_add(
        self, service, mock_repository, make_context, make_workspace
    ):
        workspace = make_workspace(manager_email="alice@kubapay.com")
        context = make_context(
            email="root@kubapay.com", is_super_admin=True, current_workspace=workspace
        )
        mock_repository.get_member = AsyncMock(return_value=None)
        mock_repository.add_member = AsyncMock()

        member = await service.add_member(
            context, email="carol@kubapay.com", name="Carol"
        )

        assert member.email == "carol@kubapay.com"

    @pytest.mark.asyncio
    async def test_active_member_conflicts(
        self, service, mock_repository, mock_probe, manager_context, make_member
    ):
        mock_repository.get_member = AsyncMock(return_value=make_member())

        with pytest.raises(ConflictError) as exc_info:
            await service.add_member(
                manager_context, email="bob@kubapay.com", name="Bob"
            )

        assert exc_info.value.code == AuthErrorCode.MEMBER_ALREADY_EXISTS
        mock_repository.add_member.assert_not_called()
        mock_probe.member_rejected.assert_called_once_with(
            workspace_id=WORKSPACE_ID, email="bob@kubapay.com", reason="already_member"
        )

    @pytest.mark.asyncio
    async def test_removed_member_is_reactivated(
        self, service, mock_repository, mock_probe, manager_context, make_member
    ):
        """Re-adding a removed member reuses their row with the new details."""
        removed = make_member(active=False)
        mock_repository.get_member = AsyncMock(return_value=removed)
        mock_repository.save_member = AsyncMock()

        member = await service.add_member(
            manager_context,
            email="bob@kubapay.com",
            name="Robert",
            role=WorkspaceMemberRole.ADMIN,
        )

        assert member.id == removed.id
        assert member.active is True
        assert member.name == "Robert"
        assert member.role == WorkspaceMemberRole.ADMIN
        mock_repository.add_member.assert_not_called()
        mock_repository.save_member.assert_called_once_with(member)
        mock_probe.member_reactivated.assert_called_once_with(
            workspace_id=WORKSPACE_ID, member_id=removed.id.value
        )
        mock_probe.member_added.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_insert_conflicts(
        self, service, mock_repository, mock_probe, manager_context
    ):
        """A unique-index race surfaces as MEMBER_ALREADY_EXISTS."""
        mock_repository.get_member = AsyncMock(return_value=None)
        mock_repository.add_member = AsyncMock(
            side_effect=DuplicateWorkspaceMemberError("duplicate")
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.add_member(
                manager_context, email="carol@kubapay.com", name="Carol"
            )

        assert exc_info.value.code == AuthErrorCode.MEMBER_ALREADY_EXISTS
        mock_probe.member_added.assert_not_called()


class TestUpdateMember:
    """Tests for update_member."""

    @pytest.mark.asyncio
    async def test_manager_changes_role(
        self, service, mock_repository, mock_probe, manager_context, make_member
    ):
        existing = make_member()
        mock_repository.get_member_by_id = AsyncMock(return_value=existing)
        mock_repository.save_member = AsyncMock()

        updated = await service.update_member(
            manager_context, existing.id.value, role=WorkspaceMemberRole.ADMIN
        )

        assert updated.role == WorkspaceMemberRole.ADMIN
        assert updated.name == existing.name
        mock_repository.get_member_by_id.assert_called_once_with(
            WorkspaceId(WORKSPACE_ID), existing.id
        )
        mock_repository.save_member.assert_called_once_with(updated)
        mock_probe.member_updated.assert_called_once_with(
            workspace_id=WORKSPACE_ID, member_id=existing.id.value
        )

    @pytest.mark.asyncio
    async def test_unknown_member(self, service, mock_repository, manager_context):
        mock_repository.get_member_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as exc_info:
            await service.update_member(manager_context, "wm_missing", name="X")

        assert exc_info.value.code == AuthErrorCode.MEMBER_NOT_FOUND
        mock_repository.save_member.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_member_id_is_not_found(
        self, service, mock_repository, manager_context
    ):
        with pytest.raises(NotFoundError):
            await service.update_member(manager_context, "  ", name="X")

        mock_repository.get_member_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_manager_denied(
        self, service, mock_repository, make_context, make_workspace
    ):
        workspace = make_workspace(manager_email="alice@kubapay.com")
        context = make_context(email="bob@kubapay.com", current_workspace=workspace)

        with pytest.raises(ForbiddenError) as exc_info:
            await service.update_member(context, "wm_1", name="X")

        assert exc_info.value.code == AuthErrorCode.MANAGER_REQUIRED
        mock_repository.get_member_by_id.assert_not_called()


class TestRemoveMember:
    """Tests for remove_member."""

    @pytest.mark.asyncio
    async def test_soft_deletes(
        self, service, mock_repository, mock_probe, manager_context, make_member
    ):
        """Removal keeps the row and marks it inactive."""
        existing = make_member()
        mock_repository.get_member_by_id = AsyncMock(return_value=existing)
        mock_repository.save_member = AsyncMock()

        await service.remove_member(manager_context, existing.id.value)

        saved = mock_repository.save_member.call_args.args[0]
        assert saved.id == existing.id
        assert saved.active is False
        mock_probe.member_removed.assert_called_once_with(
            workspace_id=WORKSPACE_ID, member_id=existing.id.value
        )

    @pytest.mark.asyncio
    async def test_unknown_member(self, service, mock_repository, manager_context):
        mock_repository.get_member_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await service.remove_member(manager_context, "wm_missing")

        mock_repository.save_member.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_manager_denied(
        self, service, mock_repository, make_context, make_workspace
    ):
        workspace = make_workspace(manager_email="alice@kubapay.com")
        context = make_context(email="bob@kubapay.com", current_workspace=workspace)

        with pytest.raises(ForbiddenError):
            await service.remove_member(context, "wm_1")

        mock_repository.save_member.assert_not_called()
