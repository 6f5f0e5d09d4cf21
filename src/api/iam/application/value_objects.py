"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
cross-cutting concerns like the authorization context of a request and
the configuration that drives privilege decisions.
"""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.aggregates import TeamMember, Workspace, WorkspaceMember
from iam.domain.value_objects import canonical_email

DEFAULT_ALLOWED_DOMAINS: tuple[str, ...] = (
    "kubapay.com",
    "vixtechnology.com",
    "voqa.com",
)


def parse_comma_list(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated configuration value.

    Entries are trimmed and lower-cased; empty entries are dropped.

    Example:
        parse_comma_list(" Alice@X.com , bob@x.com") == ("alice@x.com", "bob@x.com")
    """
    if not raw:
        return ()
    return tuple(
        entry.strip().lower() for entry in raw.split(",") if entry.strip()
    )


@dataclass(frozen=True)
class AuthorizationConfig:
    """Immutable configuration consumed by the authorization pipeline.

    Attributes:
        google_client_id: Expected token audience, or None to skip the check
        admin_emails: Legacy single-tenant admin list
        super_admin_emails: Super-admin list (already resolved to the admin
            list when no dedicated list is configured)
        allowed_domains: Domains eligible for self-service workspace creation
    """

    google_client_id: str | None
    admin_emails: frozenset[str]
    super_admin_emails: frozenset[str]
    allowed_domains: tuple[str, ...] = DEFAULT_ALLOWED_DOMAINS

    @classmethod
    def from_lists(
        cls,
        google_client_id: str | None = None,
        admin_emails: str | None = None,
        super_admin_emails: str | None = None,
        allowed_domains: str | None = None,
    ) -> AuthorizationConfig:
        """Build a config from raw comma-separated values.

        A blank or missing super-admin list falls back to the admin list.
        A blank or missing domain list falls back to the default domains.
        """
        admins = parse_comma_list(admin_emails)
        super_admins = parse_comma_list(super_admin_emails) or admins
        domains = parse_comma_list(allowed_domains) or DEFAULT_ALLOWED_DOMAINS
        return cls(
            google_client_id=(google_client_id or "").strip() or None,
            admin_emails=frozenset(admins),
            super_admin_emails=frozenset(super_admins),
            allowed_domains=domains,
        )


@dataclass(frozen=True)
class AuthenticatedUser:
    """The caller as described by the identity provider.

    Attributes:
        email: Canonical email
        name: Display name
        picture: Optional avatar URL
        given_name: Optional first name
    """

    email: str
    name: str
    picture: str | None = None
    given_name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", canonical_email(self.email))


@dataclass(frozen=True)
class AuthorizationContext:
    """Single-tenant authorization context of one request.

    Never cached or shared across requests.
    """

    user: AuthenticatedUser
    team_member: TeamMember
    is_admin: bool


@dataclass(frozen=True)
class WorkspaceAuthorizationContext:
    """Multi-tenant authorization context of one request.

    ``is_super_admin`` is computed independently from any single-tenant
    admin flag. ``current_workspace`` is only set once a target workspace
    has been resolved and access to it granted.
    """

    user: AuthenticatedUser
    team_member: TeamMember
    is_super_admin: bool
    workspaces: tuple[Workspace, ...]
    current_workspace: Workspace | None = None
    current_member: WorkspaceMember | None = None

    def workspace_ids(self) -> frozenset[str]:
        """Return ids of the workspaces resolved for the caller."""
        return frozenset(ws.id.value for ws in self.workspaces)


@dataclass(frozen=True)
class LoginVerification:
    """Outcome of verifying a sign-in.

    Carries both privilege flags so the client can tailor its UI.
    """

    user: AuthenticatedUser
    team_member: TeamMember
    is_admin: bool
    is_super_admin: bool
    workspaces: tuple[Workspace, ...]
