"""Team member application service for IAM bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.access_gate import require_admin
from iam.application.value_objects import AuthorizationContext
from iam.domain.aggregates import TeamMember
from iam.ports.repositories import ITeamMemberRepository


class TeamMemberService:
    """Application service for team administration."""

    def __init__(
        self,
        session: AsyncSession,
        team_member_repository: ITeamMemberRepository,
    ):
        self._session = session
        self._team_member_repository = team_member_repository

    async def list_team_members(self, context: AuthorizationContext) -> list[TeamMember]:
        """List all team members.

        Raises:
            ForbiddenError: ADMIN_REQUIRED if the caller is not an admin
        """
        require_admin(context)
        async with self._session.begin():
            return await self._team_member_repository.list_all()
