"""Unit tests for TeamMemberService."""

from unittest.mock import AsyncMock, create_autospec

import pytest

from iam.application.services import TeamMemberService
from iam.application.value_objects import AuthenticatedUser, AuthorizationContext
from iam.ports.repositories import ITeamMemberRepository
from shared_kernel.auth.errors import AuthErrorCode, ForbiddenError


@pytest.fixture
def mock_repository():
    return create_autospec(ITeamMemberRepository, instance=True)


@pytest.fixture
def service(mock_session, mock_repository):
    return TeamMemberService(session=mock_session, team_member_repository=mock_repository)


def context_for(member, is_admin):
    return AuthorizationContext(
        user=AuthenticatedUser(email=member.email, name=member.name),
        team_member=member,
        is_admin=is_admin,
    )


class TestListTeamMembers:
    """Tests for list_team_members."""

    @pytest.mark.asyncio
    async def test_admin_lists_members(
        self, service, mock_repository, mock_session, make_team_member
    ):
        """Admins get every team member."""
        members = [make_team_member(), make_team_member(email="bob@kubapay.com")]
        mock_repository.list_all = AsyncMock(return_value=members)

        result = await service.list_team_members(
            context_for(make_team_member(), is_admin=True)
        )

        assert result == members
        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_non_admin_denied(self, service, mock_repository, make_team_member):
        """Non-admins get ADMIN_REQUIRED and no store access."""
        with pytest.raises(ForbiddenError) as exc_info:
            await service.list_team_members(
                context_for(make_team_member(), is_admin=False)
            )

        assert exc_info.value.code == AuthErrorCode.ADMIN_REQUIRED
        mock_repository.list_all.assert_not_called()
