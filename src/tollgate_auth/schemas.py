"""Auth schemas and data structures.

These are simple data classes used for transferring token
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionClaims:
    """Identity facts to embed in a new session token.

    Attributes
    ----------
    user_id
        The unique identifier of the identity
    email
        The identity's normalized email address
    role
        The identity's role ("user" or "admin")
    """

    user_id: UUID
    email: str
    role: str


@dataclass(frozen=True)
class TokenClaims:
    """Decoded session token payload.

    This represents the data extracted from a verified token.

    Attributes
    ----------
    user_id
        The unique identifier of the identity
    email
        The identity's email address
    role
        The identity's role
    issued_at
        Token issue timestamp
    expires_at
        Token expiration timestamp
    """

    user_id: UUID
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime
