"""SQLAlchemy declarative base shared by all Tollgate models."""

from tollgate.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

__all__ = [
    "Base",
    "TimestampMixin",
]
