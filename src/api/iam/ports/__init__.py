"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    DuplicateTeamMemberEmailError,
    DuplicateWorkspaceManagerError,
    DuplicateWorkspaceMemberError,
)
from iam.ports.repositories import ITeamMemberRepository, IWorkspaceRepository

__all__ = [
    "DuplicateTeamMemberEmailError",
    "DuplicateWorkspaceManagerError",
    "DuplicateWorkspaceMemberError",
    "ITeamMemberRepository",
    "IWorkspaceRepository",
]
