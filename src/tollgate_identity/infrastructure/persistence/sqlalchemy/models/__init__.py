"""SQLAlchemy models for identity management."""

from tollgate_identity.infrastructure.persistence.sqlalchemy.models.identity_model import (  # NOQA: E501
    IdentityModel,
)

__all__ = [
    "IdentityModel",
]
