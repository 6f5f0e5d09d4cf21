"""SQLAlchemy ORM model for the team_members table.

Stores the internal identity record of everyone who has signed in.
"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TeamMemberModel(Base, TimestampMixin):
    """ORM model for team_members table.

    Unique Index:
    - email is unique; it is always stored lower-cased, so the index
      enforces case-insensitive uniqueness of team member identities
    """

    __tablename__ = "team_members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="member")
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (Index("ix_team_members_email", "email", unique=True),)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TeamMemberModel(id={self.id}, email={self.email}, role={self.role})>"
