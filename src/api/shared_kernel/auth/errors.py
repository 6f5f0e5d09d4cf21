"""Typed error taxonomy for the authentication and authorization pipeline.

Every failure of the pipeline is one of three categories:

- Unauthorized (401): identity could not be established.
- Forbidden (403): identity established but privilege is insufficient.
- Internal (500): the pipeline was invoked out of order or a store
  invariant was violated.

Workspace member management adds request errors once access is granted:
bad input (400), unknown member (404) and duplicate member (409).

Each error carries a machine-readable ``code`` so the boundary layer can
map it to a transport response without inspecting messages.
"""

from __future__ import annotations

from enum import StrEnum


class AuthErrorCode(StrEnum):
    """Distinct failure kinds surfaced to callers."""

    # Unauthorized
    MISSING_AUTH_HEADER = "MISSING_AUTH_HEADER"
    INVALID_AUTH_FORMAT = "INVALID_AUTH_FORMAT"
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_AUDIENCE = "INVALID_AUDIENCE"
    MISSING_EMAIL = "MISSING_EMAIL"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_VERIFICATION_FAILED = "TOKEN_VERIFICATION_FAILED"

    # Forbidden
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    SUPER_ADMIN_REQUIRED = "SUPER_ADMIN_REQUIRED"
    MANAGER_REQUIRED = "MANAGER_REQUIRED"
    WORKSPACE_NOT_FOUND = "WORKSPACE_NOT_FOUND"
    WORKSPACE_ACCESS_DENIED = "WORKSPACE_ACCESS_DENIED"

    # Workspace member management
    INVALID_DOMAIN = "INVALID_DOMAIN"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    MEMBER_ALREADY_EXISTS = "MEMBER_ALREADY_EXISTS"

    # Internal
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AuthError(Exception):
    """Base class for all pipeline failures.

    Attributes:
        code: The failure kind
        message: Human-readable description safe to return to the caller
        status_code: HTTP status the boundary layer should respond with
    """

    status_code: int = 500

    def __init__(self, message: str, code: AuthErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{type(self).__name__}(code={self.code!s}, message={self.message!r})"


class UnauthorizedError(AuthError):
    """Raised when the caller's identity cannot be established."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication required",
        code: AuthErrorCode = AuthErrorCode.INVALID_TOKEN,
    ) -> None:
        super().__init__(message, code)


class ForbiddenError(AuthError):
    """Raised when an established identity lacks the required privilege."""

    status_code = 403

    def __init__(
        self,
        message: str = "Access denied",
        code: AuthErrorCode = AuthErrorCode.WORKSPACE_ACCESS_DENIED,
    ) -> None:
        super().__init__(message, code)


class InternalAuthError(AuthError):
    """Raised on internal-consistency faults.

    Signals a programming or storage fault (e.g. a manager check requested
    before a workspace was resolved), never a caller mistake.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        code: AuthErrorCode = AuthErrorCode.INTERNAL_ERROR,
    ) -> None:
        super().__init__(message, code)


class BadRequestError(AuthError):
    """Raised when an authorized request carries unacceptable input."""

    status_code = 400

    def __init__(
        self, message: str, code: AuthErrorCode = AuthErrorCode.INVALID_DOMAIN
    ) -> None:
        super().__init__(message, code)


class NotFoundError(AuthError):
    status_code = 404

    def __init__(
        self,
        message: str = "Member not found",
        code: AuthErrorCode = AuthErrorCode.MEMBER_NOT_FOUND,
    ) -> None:
        super().__init__(message, code)


class ConflictError(AuthError):
    status_code = 409

    def __init__(
        self,
        message: str = "Member already exists",
        code: AuthErrorCode = AuthErrorCode.MEMBER_ALREADY_EXISTS,
    ) -> None:
        super().__init__(message, code)
