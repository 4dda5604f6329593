"""Tests for signup and sign-in payload validation."""

import pytest

from tollgate_identity import (
    UserRole,
    ValidationFailedError,
    ValidationIssue,
    format_issues,
    format_validation_error,
    validate_signin,
    validate_signup,
)


class TestValidateSignup:
    """Tests for validate_signup()."""

    def test_valid_payload_is_normalized(self):
        """Email is trimmed and lowercased, name trimmed, role defaulted."""
        data = validate_signup(
            {"name": "  Ada  ", "email": "  Ada@Example.COM ", "password": "secret1"},
        )

        assert data.name == "Ada"
        assert data.email == "ada@example.com"
        assert data.password == "secret1"
        assert data.role is UserRole.USER

    def test_name_is_optional(self):
        data = validate_signup({"email": "a@b.com", "password": "secret1"})

        assert data.name is None

    def test_admin_role_is_accepted(self):
        data = validate_signup(
            {"email": "a@b.com", "password": "secret1", "role": "admin"},
        )

        assert data.role is UserRole.ADMIN

    def test_unknown_fields_are_ignored(self):
        data = validate_signup(
            {"email": "a@b.com", "password": "secret1", "isVerified": True},
        )

        assert not hasattr(data, "isVerified")

    def test_all_issues_are_reported_in_order(self):
        """Every invalid field is reported in one pass."""
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signup({"email": "bad", "password": "123"})

        error = exc_info.value
        assert [issue.field for issue in error.issues] == ["email", "password"]
        assert error.message == (
            "Invalid email address, String should have at least 6 characters"
        )

    def test_missing_fields(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signup({})

        assert [issue.field for issue in exc_info.value.issues] == [
            "email",
            "password",
        ]
        assert exc_info.value.message == "Field required, Field required"

    def test_unknown_role_is_rejected(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signup(
                {"email": "a@b.com", "password": "secret1", "role": "superuser"},
            )

        assert exc_info.value.issues[0].field == "role"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("name", "x" * 256),
            ("email", "a" * 250 + "@example.com"),
            ("password", "p" * 129),
        ],
    )
    def test_length_limits(self, field, value):
        payload = {"email": "a@b.com", "password": "secret1", field: value}

        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signup(payload)

        assert [issue.field for issue in exc_info.value.issues] == [field]

    def test_password_bounds_are_inclusive(self):
        assert validate_signup({"email": "a@b.com", "password": "p" * 6})
        assert validate_signup({"email": "a@b.com", "password": "p" * 128})

    def test_password_never_appears_in_issues(self):
        """Issue messages describe the problem, not the submitted value."""
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signup({"email": "a@b.com", "password": "s3cr"})

        assert "s3cr" not in exc_info.value.message

    def test_non_object_payload(self):
        """A JSON array or string is reported against the whole body."""
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signup(["a@b.com", "secret1"])

        assert exc_info.value.issues[0].field == "body"

    def test_repr_hides_password(self):
        data = validate_signup({"email": "a@b.com", "password": "secret1"})

        assert "secret1" not in repr(data)


class TestValidateSignin:
    """Tests for validate_signin()."""

    def test_email_is_normalized(self):
        data = validate_signin({"email": " A@B.COM ", "password": "x"})

        assert data.email == "a@b.com"

    def test_empty_password_is_rejected(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signin({"email": "a@b.com", "password": ""})

        assert exc_info.value.issues[0].field == "password"

    def test_password_length_is_not_limited(self):
        """Sign-in accepts any non-empty password."""
        data = validate_signin({"email": "a@b.com", "password": "p" * 500})

        assert len(data.password) == 500

    def test_invalid_email(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signin({"email": "not-an-email", "password": "secret1"})

        assert exc_info.value.message == "Invalid email address"


class TestFormatting:
    """Tests for issue formatting helpers."""

    def test_format_issues_joins_messages(self):
        issues = [
            ValidationIssue(field="email", message="Invalid email address"),
            ValidationIssue(field="password", message="Too short"),
        ]

        assert format_issues(issues) == "Invalid email address, Too short"

    def test_format_validation_error_uses_issues(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_signin({})

        assert format_validation_error(exc_info.value) == (
            "Field required, Field required"
        )

    def test_format_validation_error_falls_back_to_str(self):
        """Errors without a usable issue list render as their string."""
        assert format_validation_error(ValueError("boom")) == "boom"

    def test_format_validation_error_with_malformed_issue_list(self):
        class OddError(Exception):
            def errors(self):
                return [{"unexpected": True}]

        assert format_validation_error(OddError("odd")) == "odd"
