"""Bearer token verification against the identity provider.

Tokens are opaque to this service: they are submitted to the provider's
tokeninfo endpoint, which answers with the identity payload if the token
is genuine. This is the only network I/O of the authentication pipeline.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

import httpx

from shared_kernel.auth.errors import AuthError, AuthErrorCode, UnauthorizedError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import TokenVerifierProbe

DEFAULT_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity payload returned by the provider for a genuine token.

    Attributes:
        email: Email as reported by the provider (not yet canonicalised)
        email_verified: Whether the provider has verified the email
        name: Display name; falls back to the email when not reported
        given_name: Optional first name
        picture: Optional avatar URL
        audience: The client id the token was issued for
        expires_at: Expiry as unix seconds, if reported
    """

    email: str
    email_verified: bool
    name: str
    given_name: str | None = None
    picture: str | None = None
    audience: str | None = None
    expires_at: int | None = None


@runtime_checkable
class TokenVerifier(Protocol):
    """Verifies a bearer token and returns the identity it carries."""

    async def verify(
        self, token: str, expected_audience: str | None = None
    ) -> VerifiedIdentity:
        """Verify the token.

        Raises:
            UnauthorizedError: If the token is not acceptable
        """
        ...


def _as_bool(value: Any) -> bool:
    # tokeninfo reports booleans as the strings "true"/"false"
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _as_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class GoogleTokenVerifier:
    """TokenVerifier backed by Google's tokeninfo endpoint.

    Performs exactly one round trip per call, never retries, and bounds
    the call with a timeout so a degraded provider cannot block a request
    indefinitely.
    """

    def __init__(
        self,
        probe: TokenVerifierProbe,
        tokeninfo_url: str = DEFAULT_TOKENINFO_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the verifier.

        Args:
            probe: Observability probe for verification events
            tokeninfo_url: Provider endpoint accepting ``?id_token=<token>``
            timeout_seconds: Upper bound for the provider round trip
            transport: Optional httpx transport (used to stub the provider)
            clock: Source of the current time in unix seconds
        """
        self._probe = probe
        self._tokeninfo_url = tokeninfo_url
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport
        self._clock = clock

    async def verify(
        self, token: str, expected_audience: str | None = None
    ) -> VerifiedIdentity:
        """Verify a token against the provider.

        Args:
            token: The raw bearer token
            expected_audience: If given, the payload's ``aud`` must equal it

        Returns:
            The verified identity

        Raises:
            UnauthorizedError: INVALID_TOKEN, INVALID_AUDIENCE, MISSING_EMAIL,
                EMAIL_NOT_VERIFIED, TOKEN_EXPIRED or TOKEN_VERIFICATION_FAILED
        """
        try:
            payload = await self._fetch_payload(token)
            identity = self._to_identity(payload, expected_audience)
        except AuthError:
            raise
        except Exception as e:
            self._probe.verification_error(error=e)
            raise UnauthorizedError(
                "Token verification failed", AuthErrorCode.TOKEN_VERIFICATION_FAILED
            ) from e

        self._probe.token_verified(email=identity.email)
        return identity

    async def _fetch_payload(self, token: str) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    self._tokeninfo_url, params={"id_token": token}
                )
        except httpx.HTTPError as e:
            # Transient provider failures are reported as an invalid token
            self._probe.provider_unreachable(error=str(e))
            raise UnauthorizedError(
                "Invalid or expired token", AuthErrorCode.INVALID_TOKEN
            ) from e

        if not response.is_success:
            self._probe.token_rejected(
                reason="provider_rejected", status_code=response.status_code
            )
            raise UnauthorizedError(
                "Invalid or expired token", AuthErrorCode.INVALID_TOKEN
            )

        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Identity provider returned a non-object payload")
        return payload

    def _to_identity(
        self, payload: dict[str, Any], expected_audience: str | None
    ) -> VerifiedIdentity:
        audience = _as_optional_str(payload.get("aud"))
        if expected_audience and audience != expected_audience:
            self._probe.token_rejected(reason="invalid_audience")
            raise UnauthorizedError(
                "Token was not issued for this application",
                AuthErrorCode.INVALID_AUDIENCE,
            )

        email = _as_optional_str(payload.get("email"))
        if email is None:
            self._probe.token_rejected(reason="missing_email")
            raise UnauthorizedError(
                "Token does not contain an email", AuthErrorCode.MISSING_EMAIL
            )

        if not _as_bool(payload.get("email_verified")):
            self._probe.token_rejected(reason="email_not_verified")
            raise UnauthorizedError(
                "Email is not verified", AuthErrorCode.EMAIL_NOT_VERIFIED
            )

        expires_at: int | None = None
        raw_exp = payload.get("exp")
        if raw_exp is not None and raw_exp != "":
            expires_at = int(raw_exp)
            if expires_at < self._clock():
                self._probe.token_rejected(reason="token_expired")
                raise UnauthorizedError(
                    "Token has expired", AuthErrorCode.TOKEN_EXPIRED
                )

        return VerifiedIdentity(
            email=email,
            email_verified=True,
            name=_as_optional_str(payload.get("name")) or email,
            given_name=_as_optional_str(payload.get("given_name")),
            picture=_as_optional_str(payload.get("picture")),
            audience=audience,
            expires_at=expires_at,
        )
