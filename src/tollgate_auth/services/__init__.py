"""Authentication services (pure logic, no persistence)."""

from tollgate_auth.services.jwt_service import JWTService
from tollgate_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
