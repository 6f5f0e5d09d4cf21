"""TeamMember aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime

from iam.domain.value_objects import TeamMemberId, TeamMemberRole, canonical_email


@dataclass(frozen=True)
class TeamMember:
    """Internal identity record for a person who has signed in.

    Team members are created the first time a verified identity is seen and
    are keyed by canonical email. They are never hard-deleted; deactivation
    sets ``active`` to False, which blocks all access regardless of role.

    Business rules:
    - email is stored in canonical (lower-case) form
    - role is the legacy single-tenant privilege, unrelated to workspaces
    - new members start as role=member, active=True
    """

    id: TeamMemberId
    email: str
    name: str
    first_name: str | None
    role: TeamMemberRole
    active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        if not self.email or "@" not in self.email:
            raise ValueError(f"Invalid team member email: {self.email!r}")
        if self.email != canonical_email(self.email):
            raise ValueError("Team member email must be in canonical form")

    @classmethod
    def create(
        cls,
        member_id: TeamMemberId,
        email: str,
        name: str,
        first_name: str | None = None,
    ) -> TeamMember:
        """Factory method for a first-time team member.

        Args:
            member_id: Freshly generated identifier
            email: Email as reported by the identity provider
            name: Display name
            first_name: Optional first name

        Returns:
            A new active TeamMember with role=member
        """
        now = datetime.now(UTC)
        return cls(
            id=member_id,
            email=canonical_email(email),
            name=name,
            first_name=first_name,
            role=TeamMemberRole.MEMBER,
            active=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def has_admin_role(self) -> bool:
        return self.role == TeamMemberRole.ADMIN

    def display_name_differs(self, name: str) -> bool:
        """Check whether the provider-reported name has drifted."""
        return self.name != name

    def with_display_name(self, name: str, first_name: str | None) -> TeamMember:
        """Return a copy carrying the new display name.

        ``first_name`` keeps the stored value when the provider reports none.
        """
        return replace(
            self,
            name=name,
            first_name=first_name if first_name is not None else self.first_name,
            updated_at=datetime.now(UTC),
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"TeamMember({self.email})"
