"""Tollgate Auth - Generic authentication infrastructure.

This package provides authentication building blocks that are independent
of how identities are stored. It handles:
- Password hashing (bcrypt)
- Session token signing and verification (JWT)

Architecture:
    tollgate_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from tollgate_auth import PasswordHashingService, JWTService
"""

from tollgate_auth.exceptions import (
    AuthError,
    HashingFailure,
    InvalidTokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenSigningError,
)
from tollgate_auth.schemas import SessionClaims, TokenClaims
from tollgate_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "SessionClaims",
    "TokenClaims",
    # Exceptions
    "AuthError",
    "HashingFailure",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "TokenSigningError",
]
