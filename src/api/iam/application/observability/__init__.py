"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.authentication_probe import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.observability.identity_resolver_probe import (
    DefaultIdentityResolverProbe,
    IdentityResolverProbe,
)
from iam.application.observability.workspace_provisioner_probe import (
    DefaultWorkspaceProvisionerProbe,
    WorkspaceProvisionerProbe,
)
from iam.application.observability.workspace_service_probe import (
    DefaultWorkspaceServiceProbe,
    WorkspaceServiceProbe,
)

__all__ = [
    "AuthenticationProbe",
    "DefaultAuthenticationProbe",
    "IdentityResolverProbe",
    "DefaultIdentityResolverProbe",
    "WorkspaceProvisionerProbe",
    "DefaultWorkspaceProvisionerProbe",
    "WorkspaceServiceProbe",
    "DefaultWorkspaceServiceProbe",
]
