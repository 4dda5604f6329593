"""Registration service for signup and sign-in."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tollgate_auth import (
    AuthError,
    JWTService,
    PasswordHashingService,
    SessionClaims,
    TokenClaims,
)
from tollgate_identity.application.results import AuthErrorKind, AuthResult
from tollgate_identity.application.validation import (
    ValidationFailedError,
    validate_signin,
    validate_signup,
)
from tollgate_identity.domain.identity import (
    Identity,
    IdentityProjection,
    NewIdentity,
    StoreFailure,
)

if TYPE_CHECKING:
    from tollgate_identity.domain.identity import IdentityRepository

logger = logging.getLogger(__name__)

IDENTITY_EXISTS_MESSAGE = "User with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class RegistrationService:
    """
    Application service for signup and sign-in.

    Composes validation, the identity store, password hashing and token
    signing into the two authentication transactions:
    - Signup: validate, check uniqueness, hash, insert, sign
    - Sign-in: validate, look up, verify password, upgrade a stale hash, sign

    Outcomes are returned as an AuthResult rather than raised. The caller
    owns the database transaction and must commit on success.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._identity_repo = identity_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    def _sign_token(self, identity: IdentityProjection) -> str:
        return self._jwt_service.sign(
            SessionClaims(
                user_id=identity.id,
                email=identity.email,
                role=identity.role.value,
            ),
        )

    async def signup(self, payload: Any) -> AuthResult:
        try:
            data = validate_signup(payload)
        except ValidationFailedError as e:
            logger.info("Signup rejected: %s", e.message)
            return AuthResult.failure(
                AuthErrorKind.VALIDATION_FAILED,
                e.message,
                e.issues,
            )

        try:
            existing = await self._identity_repo.find_by_email(data.email)
            if existing is not None:
                logger.info("Signup conflict for existing email: %s", data.email)
                return AuthResult.failure(
                    AuthErrorKind.IDENTITY_ALREADY_EXISTS,
                    IDENTITY_EXISTS_MESSAGE,
                )

            password_hash = self._password_service.hash(data.password)
            identity = await self._identity_repo.insert(
                NewIdentity(
                    name=data.name,
                    email=data.email,
                    password_hash=password_hash,
                    role=data.role,
                ),
            )
            token = self._sign_token(identity)

        except StoreFailure as e:
            # A concurrent signup won the race to the unique constraint
            if e.integrity_violation:
                logger.info("Signup lost uniqueness race for: %s", data.email)
                return AuthResult.failure(
                    AuthErrorKind.IDENTITY_ALREADY_EXISTS,
                    IDENTITY_EXISTS_MESSAGE,
                )
            return self._creation_failed(e.message)
        except AuthError as e:
            return self._creation_failed(e.message)
        except Exception as e:
            logger.exception("Unexpected error creating user")
            return self._creation_failed(type(e).__name__)

        logger.info(
            "Created new user: %s with role: %s",
            identity.email,
            identity.role.value,
        )
        return AuthResult.success(identity, token)

    async def signin(self, payload: Any) -> AuthResult:
        try:
            credentials = validate_signin(payload)
        except ValidationFailedError as e:
            logger.info("Sign-in rejected: %s", e.message)
            return AuthResult.failure(
                AuthErrorKind.VALIDATION_FAILED,
                e.message,
                e.issues,
            )

        try:
            identity = await self._identity_repo.find_by_email(credentials.email)
            if identity is None:
                self._password_service.verify_placeholder(credentials.password)
            if identity is None or not self._password_service.verify(
                credentials.password,
                identity.password_hash,
            ):
                logger.warning("Failed sign-in for: %s", credentials.email)
                return AuthResult.failure(
                    AuthErrorKind.INVALID_CREDENTIALS,
                    INVALID_CREDENTIALS_MESSAGE,
                )

            if self._password_service.needs_rehash(identity.password_hash):
                await self._upgrade_password_hash(identity, credentials.password)

            projection = identity.projection()
            token = self._sign_token(projection)

        except (StoreFailure, AuthError) as e:
            logger.error("Sign-in failed for %s: %s", credentials.email, e.message)
            return AuthResult.failure(
                AuthErrorKind.AUTHENTICATION_FAILED,
                f"Sign-in failed: {e.message}",
            )
        except Exception as e:
            logger.exception("Unexpected error during sign-in")
            return AuthResult.failure(
                AuthErrorKind.AUTHENTICATION_FAILED,
                f"Sign-in failed: {type(e).__name__}",
            )

        logger.info("Authenticated user: %s", projection.email)
        return AuthResult.success(projection, token)

    async def _upgrade_password_hash(self, identity: Identity, password: str) -> None:
        """Re-hash at the current cost factor after a successful verify.

        Best effort: a failure leaves the old digest in place and the
        sign-in goes ahead.
        """
        try:
            await self._identity_repo.update_password_hash(
                identity.id,
                self._password_service.hash(password),
            )
        except (StoreFailure, AuthError) as e:
            logger.warning(
                "Password rehash skipped for %s: %s",
                identity.email,
                e.message,
            )
            return
        logger.info("Upgraded password hash cost for: %s", identity.email)

    def verify_session(self, token: str) -> TokenClaims:
        """Verify a session token issued by signup or sign-in.

        Raises
        ------
        InvalidTokenError
            If the token is forged, tampered with, or expired
        """
        return self._jwt_service.verify(token)

    @staticmethod
    def _creation_failed(cause: str) -> AuthResult:
        logger.error("Error creating user: %s", cause)
        return AuthResult.failure(
            AuthErrorKind.USER_CREATION_FAILED,
            f"User creation failed: {cause}",
        )
