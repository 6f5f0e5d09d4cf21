"""Unit tests for IdentityResolver."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from iam.application.observability import IdentityResolverProbe
from iam.application.services import IdentityResolver
from iam.domain.value_objects import TeamMemberRole
from iam.ports.exceptions import DuplicateTeamMemberEmailError
from iam.ports.repositories import ITeamMemberRepository
from shared_kernel.auth.errors import InternalAuthError
from shared_kernel.auth.token_verifier import VerifiedIdentity
from shared_kernel.id_generator import IdGenerator


def identity(email="Alice@KubaPay.com", name="Alice Example", given_name="Alice"):
    return VerifiedIdentity(
        email=email, email_verified=True, name=name, given_name=given_name
    )


@pytest.fixture
def mock_repository():
    """Create mock team member repository."""
    return create_autospec(ITeamMemberRepository, instance=True)


@pytest.fixture
def mock_probe():
    """Create mock identity resolver probe."""
    return create_autospec(IdentityResolverProbe, instance=True)


@pytest.fixture
def mock_id_generator():
    """Deterministic id generator."""
    generator = MagicMock(spec=IdGenerator)
    generator.new_id.side_effect = lambda prefix: f"{prefix}_FIXED"
    return generator


@pytest.fixture
def resolver(mock_repository, mock_id_generator, mock_probe):
    """Create IdentityResolver with mock dependencies."""
    return IdentityResolver(
        team_member_repository=mock_repository,
        id_generator=mock_id_generator,
        probe=mock_probe,
    )


class TestExistingMember:
    """Tests for identities that already have a team member."""

    @pytest.mark.asyncio
    async def test_returns_stored_member_without_write(
        self, resolver, mock_repository, make_team_member
    ):
        """Unchanged names should not cause any write."""
        stored = make_team_member(name="Alice Example")
        mock_repository.get_by_email = AsyncMock(return_value=stored)

        result = await resolver.find_or_create_team_member(identity())

        assert result is stored
        mock_repository.get_by_email.assert_called_once_with("alice@kubapay.com")
        mock_repository.update_display_name.assert_not_called()
        mock_repository.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_updates_drifted_name_once(
        self, resolver, mock_repository, make_team_member, mock_probe
    ):
        """A changed display name should be written exactly once."""
        stored = make_team_member(
            name="Alice Example", first_name="Alice", role=TeamMemberRole.ADMIN
        )
        mock_repository.get_by_email = AsyncMock(return_value=stored)
        mock_repository.update_display_name = AsyncMock()

        result = await resolver.find_or_create_team_member(
            identity(name="Alicia Example", given_name="Alicia")
        )

        assert result.name == "Alicia Example"
        assert result.first_name == "Alicia"
        assert result.role == TeamMemberRole.ADMIN
        assert result.id == stored.id
        mock_repository.update_display_name.assert_called_once_with(result)
        assert mock_repository.get_by_email.call_count == 1
        mock_probe.team_member_resolved.assert_called_once_with(
            member_id=stored.id.value,
            email=stored.email,
            was_created=False,
            was_updated=True,
        )

    @pytest.mark.asyncio
    async def test_keeps_first_name_when_provider_omits_it(
        self, resolver, mock_repository, make_team_member
    ):
        """A missing given name keeps the stored first name."""
        stored = make_team_member(name="Alice Example", first_name="Alice")
        mock_repository.get_by_email = AsyncMock(return_value=stored)
        mock_repository.update_display_name = AsyncMock()

        result = await resolver.find_or_create_team_member(
            identity(name="Alice E.", given_name=None)
        )

        assert result.first_name == "Alice"


class TestNewMember:
    """Tests for first-time identities."""

    @pytest.mark.asyncio
    async def test_creates_member(self, resolver, mock_repository, mock_probe):
        """Unknown emails should create an active member with role=member."""
        mock_repository.get_by_email = AsyncMock(return_value=None)
        mock_repository.add = AsyncMock()

        result = await resolver.find_or_create_team_member(identity())

        assert result.id.value == "tm_FIXED"
        assert result.email == "alice@kubapay.com"
        assert result.name == "Alice Example"
        assert result.first_name == "Alice"
        assert result.role == TeamMemberRole.MEMBER
        assert result.active is True
        mock_repository.add.assert_called_once_with(result)
        mock_probe.team_member_resolved.assert_called_once_with(
            member_id="tm_FIXED",
            email="alice@kubapay.com",
            was_created=True,
            was_updated=False,
        )

    @pytest.mark.asyncio
    async def test_concurrent_insert_returns_winner(
        self, resolver, mock_repository, make_team_member, mock_probe
    ):
        """Losing an insert race should return the row that won."""
        winner = make_team_member(member_id="tm_WINNER")
        mock_repository.get_by_email = AsyncMock(side_effect=[None, winner])
        mock_repository.add = AsyncMock(
            side_effect=DuplicateTeamMemberEmailError("exists")
        )

        result = await resolver.find_or_create_team_member(identity())

        assert result is winner
        mock_probe.team_member_insert_conflict.assert_called_once_with(
            email="alice@kubapay.com"
        )

    @pytest.mark.asyncio
    async def test_conflict_without_readable_row_is_internal(
        self, resolver, mock_repository
    ):
        """A conflict followed by an empty re-read is an internal fault."""
        mock_repository.get_by_email = AsyncMock(return_value=None)
        mock_repository.add = AsyncMock(
            side_effect=DuplicateTeamMemberEmailError("exists")
        )

        with pytest.raises(InternalAuthError):
            await resolver.find_or_create_team_member(identity())


class TestFailures:
    """Tests for unexpected store failures."""

    @pytest.mark.asyncio
    async def test_store_error_is_logged_and_propagated(
        self, resolver, mock_repository, mock_probe
    ):
        """Unexpected errors are reported through the probe and re-raised."""
        mock_repository.get_by_email = AsyncMock(side_effect=RuntimeError("db down"))

        with pytest.raises(RuntimeError):
            await resolver.find_or_create_team_member(identity())

        mock_probe.team_member_resolution_failed.assert_called_once_with(
            email="alice@kubapay.com", error="db down"
        )
