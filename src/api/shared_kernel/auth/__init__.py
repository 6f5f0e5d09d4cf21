"""Authentication shared kernel module."""

from shared_kernel.auth.bearer import extract_bearer_token
from shared_kernel.auth.errors import (
    AuthError,
    AuthErrorCode,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalAuthError,
    NotFoundError,
    UnauthorizedError,
)
from shared_kernel.auth.observability import (
    DefaultTokenVerifierProbe,
    TokenVerifierProbe,
)
from shared_kernel.auth.token_verifier import (
    GoogleTokenVerifier,
    TokenVerifier,
    VerifiedIdentity,
)

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "BadRequestError",
    "ConflictError",
    "DefaultTokenVerifierProbe",
    "ForbiddenError",
    "GoogleTokenVerifier",
    "InternalAuthError",
    "NotFoundError",
    "TokenVerifier",
    "TokenVerifierProbe",
    "UnauthorizedError",
    "VerifiedIdentity",
    "extract_bearer_token",
]
