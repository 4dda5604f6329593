"""Centralized error responses for the FastAPI application.

Registration outcomes are mapped to HTTP responses by their
``AuthErrorKind``; framework-level exceptions are mapped by handlers.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Validation failures additionally carry ``issues``: a list of
``{"field", "message"}`` objects.

Usage:
    from tollgate.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tollgate_auth import InvalidTokenError
from tollgate_identity import (
    AuthErrorKind,
    AuthResult,
    ValidationIssue,
    format_validation_error,
)
from tollgate_identity.application.validation import issues_from_errors

logger = logging.getLogger(__name__)


# =============================================================================
# Error Kind to HTTP Status Mapping
# =============================================================================

AUTH_ERROR_TO_STATUS: dict[AuthErrorKind, int] = {
    AuthErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    AuthErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.IDENTITY_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    AuthErrorKind.USER_CREATION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthErrorKind.AUTHENTICATION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Server-side failures never expose their cause to the client
OPAQUE_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.USER_CREATION_FAILED: "User creation failed",
    AuthErrorKind.AUTHENTICATION_FAILED: "Sign-in failed",
}

INVALID_TOKEN_DETAIL = "Invalid or expired token"
INVALID_TOKEN_CODE = "INVALID_TOKEN"


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    issues: list[ValidationIssue] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict = {"detail": message, "code": code}
    if issues:
        content["issues"] = [
            {"field": issue.field, "message": issue.message} for issue in issues
        ]
    return JSONResponse(status_code=status_code, content=content)


def error_response_for(result: AuthResult) -> JSONResponse:
    """Build the HTTP response for a failed registration outcome."""
    if result.error is None:
        msg = "error_response_for() called with a successful result"
        raise ValueError(msg)

    status_code = AUTH_ERROR_TO_STATUS.get(
        result.error,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    message = OPAQUE_MESSAGES.get(result.error, result.message)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s: %s", result.error.value, result.message)

    return _create_error_response(
        status_code=status_code,
        message=message,
        code=result.error.value,
        issues=result.issues,
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle malformed request bodies (not JSON, not an object, missing)."""
    message = format_validation_error(exc)
    try:
        issues = issues_from_errors(exc.errors())
    except (KeyError, TypeError):
        issues = []

    logger.info("Malformed request to %s: %s", request.url.path, message)
    return _create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message=message,
        code=AuthErrorKind.VALIDATION_FAILED.value,
        issues=issues,
    )


async def invalid_token_exception_handler(
    request: Request,
    exc: InvalidTokenError,
) -> JSONResponse:
    """Handle invalid or expired session tokens uniformly."""
    logger.warning(
        "Rejected session token on %s: %s",
        request.url.path,
        type(exc).__name__,
    )
    return _create_error_response(
        status_code=status.HTTP_401_UNAUTHORIZED,
        message=INVALID_TOKEN_DETAIL,
        code=INVALID_TOKEN_CODE,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""
    app.add_exception_handler(
        RequestValidationError,
        request_validation_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        InvalidTokenError,
        invalid_token_exception_handler,  # type: ignore[arg-type]
    )
