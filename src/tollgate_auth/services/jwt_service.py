"""HS256 session tokens.

Signs and verifies the session tokens handed out on signup and sign-in.

Tokens are stateless: there is no revocation list, so a token stays valid
until its embedded expiry even after the client signs out.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from tollgate_auth.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenSigningError,
)
from tollgate_auth.schemas import SessionClaims, TokenClaims

logger = logging.getLogger(__name__)


class JWTService:
    """Service for session token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key=settings.jwt_secret_key.get_secret_value())
    >>> token = service.sign(SessionClaims(user_id, "user@example.com", "user"))
    >>> claims = service.verify(token)
    >>> print(claims.user_id)
    """

    DEFAULT_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "email", "role", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        expire_hours: int = DEFAULT_EXPIRE_HOURS,
    ):
        """
        Parameters
        ----------
        secret_key
            Symmetric signing key. Whoever holds it can mint sessions.
        expire_hours
            Hours until a token expires (default 24)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(hours=expire_hours)

    @property
    def lifetime(self) -> timedelta:
        return self._expire

    def sign(
        self,
        claims: SessionClaims,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed session token.

        Parameters
        ----------
        claims
            Identity facts to embed
        expires_delta
            Custom expiration time (optional, mainly for tests)

        Returns
        -------
        The compact JWS string (header.payload.signature)

        Raises
        ------
        TokenSigningError
            If the token could not be encoded
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._expire)

        payload = {
            "sub": str(claims.user_id),
            "email": claims.email,
            "role": claims.role,
            "iat": now,
            "exp": expire,
        }

        try:
            return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.error("Error signing session token: %s", type(e).__name__)
            raise TokenSigningError from e

    def verify(self, token: str) -> TokenClaims:
        """Verify and decode a session token.

        Parameters
        ----------
        token
            Compact token as read from the session cookie

        Returns
        -------
        TokenClaims containing the decoded data

        Raises
        ------
        TokenExpiredError
            If the signature is valid but the token is past its expiry
        TokenInvalidError
            If the token is forged, tampered with, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": list(self.REQUIRED_CLAIMS)},
            )

            return TokenClaims(
                user_id=UUID(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired session token")
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected invalid session token: %s", type(e).__name__)
            raise TokenInvalidError from e
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Rejected session token with malformed claims")
            raise TokenInvalidError("Malformed token payload") from e
