"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

TEAM_MEMBER_ID_PREFIX = "tm"
WORKSPACE_ID_PREFIX = "ws"
WORKSPACE_MEMBER_ID_PREFIX = "wm"


def canonical_email(email: str) -> str:
    """Return the canonical form of an email address.

    Emails are the identity key for team members and workspace managers,
    so every lookup and every write goes through this normalisation.
    """
    return email.strip().lower()


def email_domain(email: str) -> str:
    """Return the lower-cased domain part of an email (after the last '@').

    Returns an empty string when the address carries no '@'.
    """
    _, sep, domain = email.strip().rpartition("@")
    if not sep:
        return ""
    return domain.lower()


@dataclass(frozen=True)
class TeamMemberId:
    """Identifier for a TeamMember aggregate.

    Opaque string of the form ``tm_<ULID>``.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("TeamMemberId cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class WorkspaceId:
    """Identifier for a Workspace aggregate.

    Opaque string of the form ``ws_<ULID>``.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("WorkspaceId cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class WorkspaceMemberId:
    """Identifier for an explicit workspace membership row.

    Opaque string of the form ``wm_<ULID>``.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("WorkspaceMemberId cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class TeamMemberRole(StrEnum):
    """Legacy single-tenant privilege of a team member.

    Independent of any workspace role.
    """

    MEMBER = "member"
    ADMIN = "admin"


class WorkspaceMemberRole(StrEnum):
    """Role of an explicit (non-manager) member within a workspace."""

    MEMBER = "member"
    ADMIN = "admin"


class WorkspaceStatus(StrEnum):
    """Lifecycle status of a workspace."""

    ACTIVE = "active"
    INACTIVE = "inactive"
