"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application layer.
"""


class DuplicateTeamMemberEmailError(Exception):
    """Raised when inserting a team member whose email already exists.

    Two first-time sign-ins for the same email can race past the lookup;
    the store's uniqueness constraint lets exactly one insert win. The
    application layer handles this by re-reading the winning row.
    """

    pass


class DuplicateWorkspaceManagerError(Exception):
    """Raised when inserting a second workspace for the same manager email.

    This enforces at most one lazily provisioned workspace per manager.
    The application layer handles this by re-reading the existing
    workspace set.
    """

    pass


class DuplicateWorkspaceMemberError(Exception):
    """Raised when an email already has a membership row in the workspace."""

    pass
