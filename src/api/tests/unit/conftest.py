"""Unit test fixtures with mocked dependencies."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.domain.aggregates import TeamMember, Workspace
from iam.domain.value_objects import (
    TeamMemberId,
    TeamMemberRole,
    WorkspaceId,
    WorkspaceStatus,
)


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def mock_session():
    """Async session whose begin() and begin_nested() work as context managers."""
    session = AsyncMock()

    tx = MagicMock()
    tx.__aenter__ = AsyncMock(return_value=tx)
    tx.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=tx)

    nested = MagicMock()
    nested.__aenter__ = AsyncMock(return_value=nested)
    nested.__aexit__ = AsyncMock(return_value=False)
    session.begin_nested = MagicMock(return_value=nested)

    session.add = MagicMock()
    return session


@pytest.fixture
def make_team_member():
    """Factory for TeamMember aggregates with sensible defaults."""

    def _make(
        email: str = "alice@kubapay.com",
        name: str = "Alice Example",
        first_name: str | None = "Alice",
        role: TeamMemberRole = TeamMemberRole.MEMBER,
        active: bool = True,
        member_id: str = "tm_01HN3XQ7K2XYZ123456789ABCD",
    ) -> TeamMember:
        now = datetime.now(UTC)
        return TeamMember(
            id=TeamMemberId(member_id),
            email=email,
            name=name,
            first_name=first_name,
            role=role,
            active=active,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest.fixture
def make_workspace():
    """Factory for Workspace aggregates with sensible defaults."""

    def _make(
        manager_email: str = "alice@kubapay.com",
        workspace_id: str = "ws_01HN3XQ7K2XYZ123456789ABCD",
        manager_name: str | None = "Alice Example",
        allowed_domains: tuple[str, ...] = ("kubapay.com",),
        status: WorkspaceStatus = WorkspaceStatus.ACTIVE,
    ) -> Workspace:
        now = datetime.now(UTC)
        return Workspace(
            id=WorkspaceId(workspace_id),
            manager_email=manager_email,
            manager_name=manager_name,
            allowed_domains=allowed_domains,
            status=status,
            created_at=now,
            updated_at=now,
        )

    return _make
