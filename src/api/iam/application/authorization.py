"""Privilege computation for the IAM bounded context.

Two privilege flags are computed independently and must stay separate:

- ``is_admin``: the legacy single-tenant flag, true for team members with
  the admin role or whose email is on the admin list.
- ``is_super_admin``: the multi-tenant flag, true for emails on the
  super-admin list (which falls back to the admin list when unset).

Call sites check them for different purposes, so they are never merged.
"""

from __future__ import annotations

from collections.abc import Iterable

from iam.application.value_objects import AuthorizationConfig, parse_comma_list
from iam.domain.aggregates import TeamMember, Workspace
from iam.domain.value_objects import canonical_email, email_domain


def is_admin_email(email: str, admin_emails: str | None) -> bool:
    """Check an email against a raw comma-separated admin list.

    Matching is case-insensitive and ignores whitespace around entries.
    """
    return canonical_email(email) in parse_comma_list(admin_emails)


def is_domain_allowed(email: str, allowed_domains: Iterable[str]) -> bool:
    """Check whether the email's domain is on the allow-list (case-insensitive)."""
    domain = email_domain(email)
    if not domain:
        return False
    return domain in {d.strip().lower() for d in allowed_domains}


def workspace_access_granted(
    email: str,
    is_super_admin: bool,
    workspace: Workspace,
    reachable_workspace_ids: Iterable[str],
) -> bool:
    """Apply the workspace access rule.

    Granted to super admins, to the workspace's manager, and to callers
    whose resolved workspace set contains the workspace.
    """
    if is_super_admin:
        return True
    if workspace.is_managed_by(email):
        return True
    return workspace.id.value in set(reachable_workspace_ids)


def workspace_manager_granted(
    email: str, is_super_admin: bool, workspace: Workspace
) -> bool:
    """Apply the workspace manager rule."""
    return is_super_admin or workspace.is_managed_by(email)


class AuthorizationResolver:
    """Computes privilege flags from identity and configuration.

    Pure and stateless apart from the immutable configuration it holds.
    """

    def __init__(self, config: AuthorizationConfig):
        self._config = config

    @property
    def config(self) -> AuthorizationConfig:
        return self._config

    def is_admin(self, team_member: TeamMember) -> bool:
        """Single-tenant admin flag: admin role OR email on the admin list."""
        return (
            team_member.has_admin_role
            or canonical_email(team_member.email) in self._config.admin_emails
        )

    def is_super_admin(self, email: str) -> bool:
        """Multi-tenant super-admin flag."""
        return canonical_email(email) in self._config.super_admin_emails

    def is_domain_allowed(self, email: str) -> bool:
        """Check the email's domain against the configured allow-list."""
        return is_domain_allowed(email, self._config.allowed_domains)
