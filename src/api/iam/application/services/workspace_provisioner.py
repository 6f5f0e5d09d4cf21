"""Lazy workspace provisioning for IAM bounded context."""

from __future__ import annotations

from collections.abc import Sequence

from iam.application.authorization import is_domain_allowed
from iam.application.observability import (
    DefaultWorkspaceProvisionerProbe,
    WorkspaceProvisionerProbe,
)
from iam.domain.aggregates import Workspace
from iam.domain.value_objects import (
    WORKSPACE_ID_PREFIX,
    WorkspaceId,
    canonical_email,
)
from iam.ports.exceptions import DuplicateWorkspaceManagerError
from iam.ports.repositories import IWorkspaceRepository
from shared_kernel.auth.errors import InternalAuthError
from shared_kernel.id_generator import IdGenerator, UlidIdGenerator


class WorkspaceProvisioner:
    """Creates a first workspace for workspace-less users from allowed domains.

    Runs inside a transaction owned by the caller. The store allows at most
    one workspace per manager email, so concurrent first sign-ins of the
    same user end up with the same single workspace.
    """

    def __init__(
        self,
        workspace_repository: IWorkspaceRepository,
        id_generator: IdGenerator | None = None,
        probe: WorkspaceProvisionerProbe | None = None,
    ):
        self._workspace_repository = workspace_repository
        self._id_generator = id_generator or UlidIdGenerator()
        self._probe = probe or DefaultWorkspaceProvisionerProbe()

    async def ensure_workspace(
        self,
        email: str,
        name: str | None,
        allowed_domains: Sequence[str],
    ) -> list[Workspace]:
        """Return the caller's workspaces, provisioning one if eligible.

        Args:
            email: The caller's email
            name: The caller's display name (stored as manager name)
            allowed_domains: Domains eligible for self-service creation

        Returns:
            The existing workspace set; or a single new workspace when the
            set was empty and the domain is allowed; or an empty list

        Raises:
            InternalAuthError: If an insert conflict is followed by a re-read
                that finds nothing
        """
        email = canonical_email(email)
        existing = await self._workspace_repository.list_for_email(email)
        if existing:
            self._probe.workspace_provision_skipped(
                email=email, reason="has_workspaces"
            )
            return existing

        if not is_domain_allowed(email, allowed_domains):
            self._probe.workspace_provision_skipped(
                email=email, reason="domain_not_allowed"
            )
            return []

        workspace = Workspace.create(
            workspace_id=WorkspaceId(self._id_generator.new_id(WORKSPACE_ID_PREFIX)),
            manager_email=email,
            manager_name=name,
            allowed_domains=tuple(allowed_domains),
        )
        try:
            await self._workspace_repository.add(workspace)
        except DuplicateWorkspaceManagerError:
            # Provisioned concurrently for the same manager, re-query
            self._probe.workspace_insert_conflict(manager_email=email)
            concurrent = await self._workspace_repository.list_for_email(email)
            if not concurrent:
                raise InternalAuthError(
                    "Workspace insert did not yield a readable row"
                )
            return concurrent

        self._probe.workspace_provisioned(
            workspace_id=workspace.id.value, manager_email=email
        )
        return [workspace]
