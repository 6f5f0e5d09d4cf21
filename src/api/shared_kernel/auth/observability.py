"""Domain probe for bearer token verification.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to verifying tokens with the identity
provider.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TokenVerifierProbe(Protocol):
    """Domain probe for token verification operations."""

    def token_verified(self, email: str) -> None:
        """Record that a token was successfully verified."""
        ...

    def token_rejected(self, reason: str, status_code: int | None = None) -> None:
        """Record that the token was rejected."""
        ...

    def provider_unreachable(self, error: str) -> None:
        """Record that the identity provider could not be reached."""
        ...

    def verification_error(self, error: Exception) -> None:
        """Record an unexpected failure while verifying a token."""
        ...

    def with_context(self, context: ObservationContext) -> TokenVerifierProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTokenVerifierProbe:
    """Default implementation of TokenVerifierProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTokenVerifierProbe:
        """Create a new probe with observation context bound."""
        return DefaultTokenVerifierProbe(logger=self._logger, context=context)

    def token_verified(self, email: str) -> None:
        """Record that a token was successfully verified."""
        self._logger.info(
            "token_verified",
            email=email,
            **self._get_context_kwargs(),
        )

    def token_rejected(self, reason: str, status_code: int | None = None) -> None:
        """Record that the token was rejected."""
        self._logger.warning(
            "token_rejected",
            reason=reason,
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def provider_unreachable(self, error: str) -> None:
        """Record that the identity provider could not be reached."""
        self._logger.warning(
            "identity_provider_unreachable",
            error=error,
            **self._get_context_kwargs(),
        )

    def verification_error(self, error: Exception) -> None:
        """Record an unexpected failure while verifying a token."""
        self._logger.error(
            "token_verification_error",
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )
