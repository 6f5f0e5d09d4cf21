"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.team_member import TeamMember
from iam.domain.aggregates.workspace import Workspace
from iam.domain.aggregates.workspace_member import WorkspaceMember

__all__ = [
    "TeamMember",
    "Workspace",
    "WorkspaceMember",
]
