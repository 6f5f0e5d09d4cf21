"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that a token verification, an identity
    lookup and a workspace decision made for the same request can be
    correlated in the logs.

    Keys are chosen so they never collide with the keyword arguments
    the probes pass themselves.

    Attributes:
        request_id: Unique identifier for the current request.
        caller_email: Canonical email of the caller (if already known).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", caller_email="a@b.com")
        probe = DefaultIdentityResolverProbe().with_context(context)
    """

    request_id: str | None = None
    caller_email: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.caller_email is not None:
            result["caller_email"] = self.caller_email
        result.update(self.extra)
        return result
