"""Identity resolution for IAM bounded context.

Maps a verified identity from the identity provider onto an internal
team member record, creating it on first sight (JIT provisioning) and
reconciling display-name drift on later sign-ins.
"""

from __future__ import annotations

from iam.application.observability import (
    DefaultIdentityResolverProbe,
    IdentityResolverProbe,
)
from iam.domain.aggregates import TeamMember
from iam.domain.value_objects import (
    TEAM_MEMBER_ID_PREFIX,
    TeamMemberId,
    canonical_email,
)
from iam.ports.exceptions import DuplicateTeamMemberEmailError
from iam.ports.repositories import ITeamMemberRepository
from shared_kernel.auth.errors import AuthError, InternalAuthError
from shared_kernel.auth.token_verifier import VerifiedIdentity
from shared_kernel.id_generator import IdGenerator, UlidIdGenerator


class IdentityResolver:
    """Find-or-create mapping from verified identity to TeamMember.

    Runs inside a transaction owned by the caller. Concurrent first-time
    sign-ins for the same email are settled by the store's unique email
    constraint: the losing insert is converted into a re-read of the
    winning row.
    """

    def __init__(
        self,
        team_member_repository: ITeamMemberRepository,
        id_generator: IdGenerator | None = None,
        probe: IdentityResolverProbe | None = None,
    ):
        """Initialize IdentityResolver with dependencies.

        Args:
            team_member_repository: Repository for team member persistence
            id_generator: Generator for new team member ids
            probe: Optional domain probe for observability
        """
        self._team_member_repository = team_member_repository
        self._id_generator = id_generator or UlidIdGenerator()
        self._probe = probe or DefaultIdentityResolverProbe()

    async def find_or_create_team_member(
        self, identity: VerifiedIdentity
    ) -> TeamMember:
        """Return the team member for a verified identity.

        - Existing member, same name: returned as stored, no write.
        - Existing member, changed name: one update; the returned record is
          the stored one with name/first_name overwritten (no re-read).
        - Unknown email: a new member (role=member, active) is inserted.

        Args:
            identity: Identity returned by the token verifier

        Returns:
            The resolved TeamMember

        Raises:
            InternalAuthError: If an insert conflict is followed by a re-read
                that finds nothing
        """
        email = canonical_email(identity.email)
        try:
            existing = await self._team_member_repository.get_by_email(email)
            if existing is not None:
                return await self._reconcile(existing, identity)

            return await self._create(email, identity)

        except AuthError:
            raise
        except Exception as e:
            self._probe.team_member_resolution_failed(email=email, error=str(e))
            raise

    async def _reconcile(
        self, existing: TeamMember, identity: VerifiedIdentity
    ) -> TeamMember:
        if not existing.display_name_differs(identity.name):
            self._probe.team_member_resolved(
                member_id=existing.id.value,
                email=existing.email,
                was_created=False,
                was_updated=False,
            )
            return existing

        updated = existing.with_display_name(identity.name, identity.given_name)
        await self._team_member_repository.update_display_name(updated)
        self._probe.team_member_resolved(
            member_id=updated.id.value,
            email=updated.email,
            was_created=False,
            was_updated=True,
        )
        return updated

    async def _create(self, email: str, identity: VerifiedIdentity) -> TeamMember:
        member = TeamMember.create(
            member_id=TeamMemberId(self._id_generator.new_id(TEAM_MEMBER_ID_PREFIX)),
            email=email,
            name=identity.name,
            first_name=identity.given_name,
        )
        try:
            await self._team_member_repository.add(member)
        except DuplicateTeamMemberEmailError:
            # Another request created it concurrently, re-query
            self._probe.team_member_insert_conflict(email=email)
            winner = await self._team_member_repository.get_by_email(email)
            if winner is None:
                raise InternalAuthError(
                    "Team member insert did not yield a readable row"
                )
            self._probe.team_member_resolved(
                member_id=winner.id.value,
                email=email,
                was_created=False,
                was_updated=False,
            )
            return winner

        self._probe.team_member_resolved(
            member_id=member.id.value,
            email=email,
            was_created=True,
            was_updated=False,
        )
        return member
