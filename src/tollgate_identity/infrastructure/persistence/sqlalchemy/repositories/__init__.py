from tollgate_identity.infrastructure.persistence.sqlalchemy.repositories.identity_repository import (  # NOQA: E501
    IdentityRepositorySQLAlchemy,
)

__all__ = [
    "IdentityRepositorySQLAlchemy",
]
