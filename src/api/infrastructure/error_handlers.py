"""Boundary mapping from pipeline errors to HTTP responses.

Every AuthError becomes a JSON body of the form
``{"success": false, "error": {"code": ..., "message": ...}}`` with the
error's status code. Internal errors never expose their message, and any
other unhandled exception is rendered as ``INTERNAL_ERROR``.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared_kernel.auth.errors import AuthError, AuthErrorCode, InternalAuthError

logger = structlog.get_logger()

INTERNAL_MESSAGE = "Internal server error"


def error_body(code: str, message: str) -> dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message}}


async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    """Render an AuthError raised anywhere during request handling."""
    headers: dict[str, str] | None = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    message = exc.message
    if isinstance(exc, InternalAuthError):
        logger.error(
            "internal_auth_error",
            path=request.url.path,
            error=exc.message,
        )
        message = INTERNAL_MESSAGE

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, message),
        headers=headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render an exception no other handler claimed, e.g. a database outage."""
    logger.error(
        "unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(AuthErrorCode.INTERNAL_ERROR, INTERNAL_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the pipeline's exception handlers on the application."""
    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
