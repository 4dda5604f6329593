"""SQLAlchemy implementation for tollgate_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- IdentityModel: SQLAlchemy model for identities
- IdentityRepositorySQLAlchemy: Repository implementation for identities
"""

from tollgate_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from tollgate_identity.infrastructure.persistence.sqlalchemy.models import (
    IdentityModel,
)
from tollgate_identity.infrastructure.persistence.sqlalchemy.repositories import (
    IdentityRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "IdentityModel",
    "IdentityRepositorySQLAlchemy",
]
