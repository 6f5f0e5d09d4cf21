"""Unit tests for TeamMember aggregate."""

from dataclasses import FrozenInstanceError

import pytest

from iam.domain.aggregates import TeamMember
from iam.domain.value_objects import TeamMemberId, TeamMemberRole


class TestTeamMemberCreate:
    """Tests for TeamMember.create factory."""

    def test_creates_active_member(self):
        """New members should be active with role=member."""
        member = TeamMember.create(
            member_id=TeamMemberId("tm_1"),
            email="Alice@KubaPay.com",
            name="Alice Example",
            first_name="Alice",
        )

        assert member.email == "alice@kubapay.com"
        assert member.role == TeamMemberRole.MEMBER
        assert member.active is True
        assert member.first_name == "Alice"
        assert member.created_at == member.updated_at

    def test_rejects_email_without_at(self):
        """An email without '@' is invalid."""
        with pytest.raises(ValueError):
            TeamMember.create(
                member_id=TeamMemberId("tm_1"), email="alice", name="Alice"
            )

    def test_rejects_non_canonical_email(self, make_team_member):
        """Direct construction requires the canonical form."""
        with pytest.raises(ValueError):
            make_team_member(email="Alice@KubaPay.com")


class TestTeamMemberBehaviour:
    """Tests for TeamMember behaviour."""

    def test_is_immutable(self, make_team_member):
        """TeamMember is a frozen value."""
        member = make_team_member()
        with pytest.raises(FrozenInstanceError):
            member.name = "Other"  # type: ignore[misc]

    def test_has_admin_role(self, make_team_member):
        """has_admin_role reflects the stored role only."""
        assert make_team_member(role=TeamMemberRole.ADMIN).has_admin_role
        assert not make_team_member().has_admin_role

    def test_display_name_differs(self, make_team_member):
        """Should compare the stored name exactly."""
        member = make_team_member(name="Alice Example")
        assert not member.display_name_differs("Alice Example")
        assert member.display_name_differs("Alice E.")

    def test_with_display_name_overwrites_names(self, make_team_member):
        """Should return a copy with the new name and first name."""
        member = make_team_member(name="Alice Example", first_name="Alice")

        updated = member.with_display_name("Alicia Example", "Alicia")

        assert updated.name == "Alicia Example"
        assert updated.first_name == "Alicia"
        assert updated.id == member.id
        assert updated.updated_at >= member.updated_at
        assert member.name == "Alice Example"

    def test_with_display_name_keeps_first_name_when_absent(self, make_team_member):
        """A missing first name keeps the stored one."""
        member = make_team_member(first_name="Alice")

        updated = member.with_display_name("Alice Renamed", None)

        assert updated.first_name == "Alice"
