"""Identity application layer: validation, results and services."""

from tollgate_identity.application.results import AuthErrorKind, AuthResult
from tollgate_identity.application.services import RegistrationService
from tollgate_identity.application.validation import (
    SigninInput,
    SignupInput,
    ValidationFailedError,
    ValidationIssue,
    format_issues,
    format_validation_error,
    validate_signin,
    validate_signup,
)

__all__ = [
    "AuthErrorKind",
    "AuthResult",
    "RegistrationService",
    "SigninInput",
    "SignupInput",
    "ValidationFailedError",
    "ValidationIssue",
    "format_issues",
    "format_validation_error",
    "validate_signin",
    "validate_signup",
]
