"""create identity tables

Revision ID: 3c1f0a9d7e21
Revises:
Create Date: 2026-10-19 09:12:04.118530

Creates team_members, workspaces and workspace_members. The unique indexes
on team member email and workspace manager email are what make first
sign-in provisioning safe under concurrent requests.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create identity tables.

    Key constraints:
    - team_members.email unique (stored lower-cased)
    - workspaces.manager_email unique (one workspace per manager)
    - workspace_members (workspace_id, email) unique, CASCADE on workspace delete
    """
    op.create_table(
        "team_members",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column(
            "role", sa.String(16), nullable=False, server_default="member"
        ),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_team_members_email", "team_members", ["email"], unique=True
    )

    op.create_table(
        "workspaces",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("manager_email", sa.String(320), nullable=False),
        sa.Column("manager_name", sa.String(255), nullable=True),
        sa.Column("allowed_domains", sa.JSON, nullable=False),
        sa.Column(
            "status", sa.String(16), nullable=False, server_default="active"
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_workspaces_manager_email", "workspaces", ["manager_email"], unique=True
    )

    op.create_table(
        "workspace_members",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "workspace_id",
            sa.String(64),
            sa.ForeignKey("workspaces.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column(
            "role", sa.String(16), nullable=False, server_default="member"
        ),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_workspace_members_email", "workspace_members", ["email"]
    )
    op.create_index(
        "ix_workspace_members_workspace_email",
        "workspace_members",
        ["workspace_id", "email"],
        unique=True,
    )


def downgrade() -> None:
    """Drop identity tables."""
    op.drop_index(
        "ix_workspace_members_workspace_email", table_name="workspace_members"
    )
    op.drop_index("ix_workspace_members_email", table_name="workspace_members")
    op.drop_table("workspace_members")
    op.drop_index("ix_workspaces_manager_email", table_name="workspaces")
    op.drop_table("workspaces")
    op.drop_index("ix_team_members_email", table_name="team_members")
    op.drop_table("team_members")
