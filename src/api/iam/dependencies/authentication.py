"""Process-wide authentication collaborators.

Everything here is built once from settings and shared across requests;
none of it holds request state.
"""

from functools import lru_cache

from iam.application.authorization import AuthorizationResolver
from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.value_objects import AuthorizationConfig
from infrastructure.settings import (
    get_iam_settings,
    get_identity_provider_settings,
)
from shared_kernel.auth import (
    DefaultTokenVerifierProbe,
    GoogleTokenVerifier,
    TokenVerifier,
)


@lru_cache
def get_authorization_config() -> AuthorizationConfig:
    """Get the cached, immutable authorization configuration.

    Returns:
        AuthorizationConfig built from IAM settings
    """
    settings = get_iam_settings()
    return AuthorizationConfig.from_lists(
        google_client_id=settings.google_client_id,
        admin_emails=settings.admin_emails,
        super_admin_emails=settings.super_admin_emails,
        allowed_domains=settings.allowed_domains,
    )


@lru_cache
def get_token_verifier() -> TokenVerifier:
    """Get cached token verifier.

    Returns:
        GoogleTokenVerifier configured from identity provider settings.
    """
    settings = get_identity_provider_settings()
    return GoogleTokenVerifier(
        probe=DefaultTokenVerifierProbe(),
        tokeninfo_url=settings.tokeninfo_url,
        timeout_seconds=settings.timeout_seconds,
    )


def get_authorization_resolver() -> AuthorizationResolver:
    return AuthorizationResolver(get_authorization_config())


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance.

    Returns:
        DefaultAuthenticationProbe instance for observability
    """
    return DefaultAuthenticationProbe()
