"""Tollgate Identity - registration, sign-in and identity storage.

This package handles:
- Identity records (name, normalized email, password hash, role)
- Input validation for signup and sign-in payloads
- The signup / sign-in transactions (RegistrationService)

Password hashing and token signing live in tollgate_auth; the HTTP
boundary lives in tollgate.presentation.api.
"""

from tollgate_identity.application import (
    AuthErrorKind,
    AuthResult,
    RegistrationService,
    ValidationFailedError,
    ValidationIssue,
    format_issues,
    format_validation_error,
    validate_signin,
    validate_signup,
)
from tollgate_identity.domain.identity import (
    Identity,
    IdentityProjection,
    IdentityRepository,
    NewIdentity,
    StoreFailure,
    UserRole,
    normalize_email,
)

__all__ = [
    # Domain
    "Identity",
    "IdentityProjection",
    "IdentityRepository",
    "NewIdentity",
    "StoreFailure",
    "UserRole",
    "normalize_email",
    # Application
    "AuthErrorKind",
    "AuthResult",
    "RegistrationService",
    "ValidationFailedError",
    "ValidationIssue",
    "format_issues",
    "format_validation_error",
    "validate_signin",
    "validate_signup",
]
