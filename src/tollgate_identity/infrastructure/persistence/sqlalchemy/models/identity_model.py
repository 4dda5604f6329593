"""SQLAlchemy model for the Identity aggregate."""

from uuid import UUID, uuid4

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from tollgate.infrastructure.persistence.sqlalchemy.models.base import TimestampMixin
from tollgate_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase


class IdentityModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting registered identities.

    The unique index on ``email`` is the authoritative uniqueness guarantee;
    the application-level pre-check only exists for a friendlier error.
    """

    __tablename__ = "identities"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="user", nullable=False)

    def __repr__(self) -> str:
        return f"<IdentityModel(id={self.id}, email={self.email}, role={self.role})>"
