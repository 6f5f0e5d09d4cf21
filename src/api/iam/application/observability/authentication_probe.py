"""Protocol for authentication observability.

Defines the interface for domain probes that capture authentication and
authorization outcomes of the request pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_authenticated(
        self,
        email: str,
        is_admin: bool,
    ) -> None:
        """Record successful single-tenant authentication."""
        ...

    def workspace_user_authenticated(
        self,
        email: str,
        is_super_admin: bool,
        workspace_count: int,
        workspace_id: str | None = None,
    ) -> None:
        """Record successful multi-tenant authentication."""
        ...

    def login_verified(self, email: str, workspace_count: int) -> None:
        """Record a successful sign-in verification."""
        ...

    def authentication_failed(
        self,
        code: str,
        reason: str,
    ) -> None:
        """Record authentication or authorization failure."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def user_authenticated(
        self,
        email: str,
        is_admin: bool,
    ) -> None:
        """Record successful single-tenant authentication."""
        self._logger.info(
            "user_authenticated",
            email=email,
            is_admin=is_admin,
            **self._get_context_kwargs(),
        )

    def workspace_user_authenticated(
        self,
        email: str,
        is_super_admin: bool,
        workspace_count: int,
        workspace_id: str | None = None,
    ) -> None:
        """Record successful multi-tenant authentication."""
        self._logger.info(
            "workspace_user_authenticated",
            email=email,
            is_super_admin=is_super_admin,
            workspace_count=workspace_count,
            workspace_id=workspace_id,
            **self._get_context_kwargs(),
        )

    def login_verified(self, email: str, workspace_count: int) -> None:
        """Record a successful sign-in verification."""
        self._logger.info(
            "login_verified",
            email=email,
            workspace_count=workspace_count,
            **self._get_context_kwargs(),
        )

    def authentication_failed(
        self,
        code: str,
        reason: str,
    ) -> None:
        """Record authentication or authorization failure."""
        self._logger.warning(
            "authentication_failed",
            code=code,
            reason=reason,
            **self._get_context_kwargs(),
        )
