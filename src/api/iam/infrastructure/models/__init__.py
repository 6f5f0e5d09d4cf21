"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.team_member import TeamMemberModel
from iam.infrastructure.models.workspace import WorkspaceMemberModel, WorkspaceModel

__all__ = [
    "TeamMemberModel",
    "WorkspaceMemberModel",
    "WorkspaceModel",
]
