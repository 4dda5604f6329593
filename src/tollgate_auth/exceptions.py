"""Authentication exceptions.

These exceptions are raised by the tollgate_auth package and should be
caught and handled by the application layer (RegistrationService).
None of the messages ever include a password or the signing secret.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class HashingFailure(AuthError):  # NOQA: N818
    """Raised when a password could not be hashed."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)


class TokenSigningError(AuthError):
    """Raised when a session token could not be signed."""

    def __init__(self, message: str = "Could not sign session token"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a session token is invalid or expired.

    Callers outside this package should only catch this class, so that
    an expired token and a forged one look the same to a client.
    """

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenInvalidError(InvalidTokenError):
    """Raised when a token's signature or structure does not check out."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)
