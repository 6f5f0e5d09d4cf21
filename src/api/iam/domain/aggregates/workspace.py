"""Workspace aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from iam.domain.value_objects import (
    WorkspaceId,
    WorkspaceStatus,
    canonical_email,
    email_domain,
)


def _normalize_domains(domains: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    seen: list[str] = []
    for domain in domains:
        cleaned = domain.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return tuple(seen)


@dataclass(frozen=True)
class Workspace:
    """Workspace aggregate representing a tenant boundary.

    A workspace is owned by exactly one manager, named by email at creation
    time. The manager never changes afterwards. Workspaces are provisioned
    lazily the first time a workspace-less user from an allowed domain signs
    in.

    Business rules:
    - manager_email is canonical and immutable
    - allowed_domains are lower-cased and de-duplicated
    - status is active or inactive

    Instances are immutable; update() returns a new Workspace.
    """

    id: WorkspaceId
    manager_email: str
    manager_name: str | None
    allowed_domains: tuple[str, ...]
    status: WorkspaceStatus
    created_at: datetime
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        if not self.manager_email or "@" not in self.manager_email:
            raise ValueError(f"Invalid manager email: {self.manager_email!r}")
        object.__setattr__(self, "manager_email", canonical_email(self.manager_email))
        object.__setattr__(
            self, "allowed_domains", _normalize_domains(self.allowed_domains)
        )

    @classmethod
    def create(
        cls,
        workspace_id: WorkspaceId,
        manager_email: str,
        manager_name: str | None,
        allowed_domains: list[str] | tuple[str, ...],
    ) -> Workspace:
        """Factory method for a newly provisioned workspace.

        Args:
            workspace_id: Freshly generated identifier
            manager_email: Email of the user who becomes manager
            manager_name: Display name of the manager
            allowed_domains: Email domains eligible for self-service membership

        Returns:
            A new active Workspace
        """
        now = datetime.now(UTC)
        return cls(
            id=workspace_id,
            manager_email=manager_email,
            manager_name=manager_name,
            allowed_domains=tuple(allowed_domains),
            status=WorkspaceStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    def is_managed_by(self, email: str) -> bool:
        """Check whether the email is this workspace's manager (case-insensitive)."""
        return self.manager_email == canonical_email(email)

    def allows_domain_of(self, email: str) -> bool:
        """Check whether the email's domain is on this workspace's allow-list."""
        return email_domain(email) in self.allowed_domains

    def update(
        self,
        manager_name: str | None = None,
        allowed_domains: list[str] | None = None,
        status: WorkspaceStatus | None = None,
    ) -> Workspace:
        """Return a copy with the given settings changed.

        The manager email is not updatable.
        """
        return replace(
            self,
            manager_name=self.manager_name if manager_name is None else manager_name,
            allowed_domains=self.allowed_domains
            if allowed_domains is None
            else tuple(allowed_domains),
            status=self.status if status is None else status,
            updated_at=datetime.now(UTC),
        )
