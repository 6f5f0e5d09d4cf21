"""Bearer credential extraction from the Authorization header."""

from __future__ import annotations

from shared_kernel.auth.errors import AuthErrorCode, UnauthorizedError

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """Extract the raw token from an ``Authorization: Bearer <token>`` header.

    All three checks happen locally, before any call to the identity
    provider. The prefix match is case-sensitive.

    Args:
        authorization: The raw header value, or None if the header is absent

    Returns:
        The token with surrounding whitespace removed

    Raises:
        UnauthorizedError: MISSING_AUTH_HEADER, INVALID_AUTH_FORMAT or
            MISSING_TOKEN
    """
    if not authorization:
        raise UnauthorizedError(
            "Authorization header is required", AuthErrorCode.MISSING_AUTH_HEADER
        )

    if not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError(
            "Invalid authorization format. Use: Bearer <token>",
            AuthErrorCode.INVALID_AUTH_FORMAT,
        )

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise UnauthorizedError("Token is required", AuthErrorCode.MISSING_TOKEN)

    return token
