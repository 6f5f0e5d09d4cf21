"""SQLAlchemy ORM models for the workspaces and workspace_members tables."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin, utc_now


class WorkspaceModel(Base, TimestampMixin):
    """ORM model for workspaces table.

    Unique Index:
    - manager_email is unique: at most one workspace per manager, which is
      what keeps lazy provisioning from creating duplicates under
      concurrent first sign-ins
    """

    __tablename__ = "workspaces"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    manager_email: Mapped[str] = mapped_column(String(320), nullable=False)
    manager_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    allowed_domains: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")

    members = relationship(
        "WorkspaceMemberModel",
        back_populates="workspace",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_workspaces_manager_email", "manager_email", unique=True),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<WorkspaceModel(id={self.id}, manager_email={self.manager_email}, "
            f"status={self.status})>"
        )


class WorkspaceMemberModel(Base):
    """ORM model for workspace_members table.

    Foreign Key Constraints:
    - workspace_id references workspaces.id with CASCADE delete

    Unique Index:
    - (workspace_id, email): an email is a member of a workspace at most once
    """

    __tablename__ = "workspace_members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    workspace_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="member")
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=utc_now, nullable=False
    )

    workspace = relationship("WorkspaceModel", back_populates="members")

    __table_args__ = (
        Index(
            "ix_workspace_members_workspace_email",
            "workspace_id",
            "email",
            unique=True,
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<WorkspaceMemberModel(workspace_id={self.workspace_id}, "
            f"email={self.email}, role={self.role})>"
        )
