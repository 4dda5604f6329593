from enum import Enum


class UserRole(str, Enum):
    """Roles an identity can carry in its session token."""

    USER = "user"
    ADMIN = "admin"
