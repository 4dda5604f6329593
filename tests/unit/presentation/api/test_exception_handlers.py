"""Tests for mapping registration outcomes to HTTP responses."""

import json

import pytest

from tollgate.presentation.api.exception_handlers import (
    AUTH_ERROR_TO_STATUS,
    error_response_for,
)
from tollgate_identity import AuthErrorKind, AuthResult, ValidationIssue


def _body(response) -> dict:
    return json.loads(response.body)


class TestErrorResponseFor:
    @pytest.mark.parametrize(
        ("kind", "status_code"),
        [
            (AuthErrorKind.VALIDATION_FAILED, 400),
            (AuthErrorKind.INVALID_CREDENTIALS, 401),
            (AuthErrorKind.IDENTITY_ALREADY_EXISTS, 409),
            (AuthErrorKind.USER_CREATION_FAILED, 500),
            (AuthErrorKind.AUTHENTICATION_FAILED, 500),
        ],
    )
    def test_status_codes(self, kind, status_code):
        response = error_response_for(AuthResult.failure(kind, "msg"))

        assert response.status_code == status_code
        assert _body(response)["code"] == kind.value

    def test_every_kind_is_mapped(self):
        assert set(AUTH_ERROR_TO_STATUS) == set(AuthErrorKind)

    def test_validation_issues_are_included(self):
        result = AuthResult.failure(
            AuthErrorKind.VALIDATION_FAILED,
            "Invalid email address",
            [ValidationIssue(field="email", message="Invalid email address")],
        )

        body = _body(error_response_for(result))

        assert body["detail"] == "Invalid email address"
        assert body["issues"] == [
            {"field": "email", "message": "Invalid email address"},
        ]

    def test_server_failures_hide_their_cause(self):
        result = AuthResult.failure(
            AuthErrorKind.USER_CREATION_FAILED,
            "User creation failed: Identity insert failed",
        )

        body = _body(error_response_for(result))

        assert body == {"detail": "User creation failed", "code": "USER_CREATION_FAILED"}

    def test_successful_result_is_refused(self):
        with pytest.raises(ValueError):
            error_response_for(AuthResult())
