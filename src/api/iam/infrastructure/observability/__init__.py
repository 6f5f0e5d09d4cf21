"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    DefaultTeamMemberRepositoryProbe,
    DefaultWorkspaceRepositoryProbe,
    TeamMemberRepositoryProbe,
    WorkspaceRepositoryProbe,
)

__all__ = [
    "TeamMemberRepositoryProbe",
    "DefaultTeamMemberRepositoryProbe",
    "WorkspaceRepositoryProbe",
    "DefaultWorkspaceRepositoryProbe",
]
