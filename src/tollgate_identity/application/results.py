"""Tagged outcomes returned by the registration service.

The HTTP boundary maps ``AuthErrorKind`` to status codes and never
inspects message text.
"""

from dataclasses import dataclass, field
from enum import Enum

from tollgate_identity.application.validation import ValidationIssue
from tollgate_identity.domain.identity import IdentityProjection


class AuthErrorKind(str, Enum):
    """Stable error codes for API clients."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    IDENTITY_ALREADY_EXISTS = "IDENTITY_ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_CREATION_FAILED = "USER_CREATION_FAILED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a signup or sign-in attempt.

    Attributes
    ----------
    identity
        The non-secret identity projection (success only)
    token
        The freshly signed session token (success only)
    error
        What went wrong (failure only)
    message
        Human-readable description of the failure
    issues
        Field-level problems when ``error`` is VALIDATION_FAILED
    """

    identity: IdentityProjection | None = None
    token: str | None = None
    error: AuthErrorKind | None = None
    message: str = ""
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, identity: IdentityProjection, token: str) -> "AuthResult":
        return cls(identity=identity, token=token)

    @classmethod
    def failure(
        cls,
        error: AuthErrorKind,
        message: str,
        issues: list[ValidationIssue] | None = None,
    ) -> "AuthResult":
        return cls(error=error, message=message, issues=issues or [])

    def __repr__(self) -> str:
        if self.ok:
            return f"AuthResult(ok, identity={self.identity})"
        return f"AuthResult(error={self.error.value}, message={self.message!r})"
