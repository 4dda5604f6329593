"""Input validation for signup and sign-in payloads.

Payloads are checked exhaustively: every invalid field is reported in one
pass, in the order pydantic encounters them. Emails are normalized with
the same function the identity store uses for lookups.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from tollgate_identity.domain.identity import UserRole, normalize_email

MAX_NAME_LENGTH = 255
MAX_EMAIL_LENGTH = 255
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128


@dataclass(frozen=True)
class ValidationIssue:
    """A single field-level validation problem."""

    field: str
    message: str


class ValidationFailedError(ValueError):
    """Raised when a payload violates one or more field constraints."""

    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        self.issues = list(issues)
        self.message = format_issues(self.issues)
        super().__init__(self.message)


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        msg = "Invalid email address"
        raise PydanticCustomError("email_invalid", msg) from e
    return value


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class SignupInput(BaseModel):
    """Normalized signup payload."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    email: str = Field(..., max_length=MAX_EMAIL_LENGTH)
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=MAX_PASSWORD_LENGTH,
    )
    role: UserRole = UserRole.USER

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, v: Any) -> Any:
        return _strip(v)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v: Any) -> Any:
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _check_email(v)

    def __repr__(self) -> str:
        return f"SignupInput(email={self.email}, role={self.role.value})"


class SigninInput(BaseModel):
    """Normalized sign-in payload."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v: Any) -> Any:
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _check_email(v)

    def __repr__(self) -> str:
        return f"SigninInput(email={self.email})"


def validate_signup(payload: Any) -> SignupInput:
    """Validate and normalize a signup payload.

    Raises
    ------
    ValidationFailedError
        With every field-level issue found
    """
    try:
        return SignupInput.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationFailedError(issues_from_errors(e.errors())) from None


def validate_signin(payload: Any) -> SigninInput:
    """Validate and normalize sign-in credentials.

    Raises
    ------
    ValidationFailedError
        With every field-level issue found
    """
    try:
        return SigninInput.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationFailedError(issues_from_errors(e.errors())) from None


def issues_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[ValidationIssue]:
    """Convert pydantic-style error dicts into ValidationIssues.

    Only ``loc`` and ``msg`` are read; submitted values are dropped so that
    passwords never end up in an issue.
    """
    issues = []
    for error in errors:
        loc = [str(part) for part in error["loc"] if part != "body"]
        issues.append(
            ValidationIssue(field=".".join(loc) or "body", message=str(error["msg"])),
        )
    return issues


def format_issues(issues: Sequence[ValidationIssue]) -> str:
    """Join issue messages in encounter order."""
    return ", ".join(issue.message for issue in issues)


def format_validation_error(error: Exception) -> str:
    """Render any pydantic-style validation error as a single message.

    Falls back to ``str(error)`` when the error has no usable issue list.
    """
    if isinstance(error, ValidationFailedError):
        return error.message

    try:
        issues = issues_from_errors(error.errors())  # type: ignore[attr-defined]
    except (AttributeError, KeyError, TypeError):
        return str(error)

    if not issues:
        return str(error)
    return format_issues(issues)
