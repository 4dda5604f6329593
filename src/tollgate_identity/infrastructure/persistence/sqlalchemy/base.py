"""SQLAlchemy declarative base for tollgate_identity models.

Uses the same metadata as tollgate's Base so one create_all covers both.
"""

from tollgate.infrastructure.persistence.sqlalchemy.models.base import Base

IdentityBase = Base
