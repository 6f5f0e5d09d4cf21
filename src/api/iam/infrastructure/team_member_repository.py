"""PostgreSQL implementation of ITeamMemberRepository.

Repositories never commit: the calling service owns the transaction.
Inserts run inside a SAVEPOINT so that a unique-constraint violation
only rolls back the failed insert and the caller can re-read the row
that won the race within the same transaction.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import TeamMember
from iam.domain.value_objects import TeamMemberId, TeamMemberRole, canonical_email
from iam.infrastructure.models import TeamMemberModel
from iam.infrastructure.observability import (
    DefaultTeamMemberRepositoryProbe,
    TeamMemberRepositoryProbe,
)
from iam.ports.exceptions import DuplicateTeamMemberEmailError
from iam.ports.repositories import ITeamMemberRepository

EMAIL_UNIQUE_INDEX = "ix_team_members_email"


class TeamMemberRepository(ITeamMemberRepository):
    """PostgreSQL-backed repository for TeamMember aggregates."""

    def __init__(
        self, session: AsyncSession, probe: TeamMemberRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTeamMemberRepositoryProbe()

    async def get_by_email(self, email: str) -> TeamMember | None:
        """Retrieve a team member by email (canonicalised before lookup)."""
        email = canonical_email(email)
        stmt = select(TeamMemberModel).where(TeamMemberModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.team_member_not_found(email)
            return None

        return self._to_domain(model)

    async def get_by_id(self, member_id: TeamMemberId) -> TeamMember | None:
        stmt = select(TeamMemberModel).where(TeamMemberModel.id == member_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def add(self, member: TeamMember) -> None:
        """Insert a new team member.

        Raises:
            DuplicateTeamMemberEmailError: If the email is already taken
        """
        try:
            async with self._session.begin_nested():
                self._session.add(
                    TeamMemberModel(
                        id=member.id.value,
                        email=member.email,
                        name=member.name,
                        first_name=member.first_name,
                        role=member.role.value,
                        active=member.active,
                        created_at=member.created_at,
                        updated_at=member.updated_at,
                    )
                )
                # Flush inside the savepoint to surface constraint violations
                await self._session.flush()
        except IntegrityError as e:
            if EMAIL_UNIQUE_INDEX in str(e):
                self._probe.duplicate_team_member_email(member.email)
                raise DuplicateTeamMemberEmailError(
                    f"Team member '{member.email}' already exists"
                ) from e
            raise

        self._probe.team_member_added(member.id.value, member.email)

    async def update_display_name(self, member: TeamMember) -> None:
        stmt = (
            update(TeamMemberModel)
            .where(TeamMemberModel.id == member.id.value)
            .values(
                name=member.name,
                first_name=member.first_name,
                updated_at=member.updated_at,
            )
        )
        await self._session.execute(stmt)
        self._probe.team_member_updated(member.id.value)

    async def list_all(self) -> list[TeamMember]:
        stmt = select(TeamMemberModel).order_by(TeamMemberModel.email)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: TeamMemberModel) -> TeamMember:
        return TeamMember(
            id=TeamMemberId(value=model.id),
            email=model.email,
            name=model.name,
            first_name=model.first_name,
            role=TeamMemberRole(model.role),
            active=model.active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
