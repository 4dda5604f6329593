"""Identity domain: registered principals and how they are stored."""

from tollgate_identity.domain.identity.aggregates import (
    Identity,
    IdentityProjection,
    NewIdentity,
)
from tollgate_identity.domain.identity.exceptions import StoreFailure
from tollgate_identity.domain.identity.repositories import IdentityRepository
from tollgate_identity.domain.identity.value_objects import UserRole, normalize_email

__all__ = [
    "Identity",
    "IdentityProjection",
    "IdentityRepository",
    "NewIdentity",
    "StoreFailure",
    "UserRole",
    "normalize_email",
]
