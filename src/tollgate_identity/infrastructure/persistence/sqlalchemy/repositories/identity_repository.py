"""SQLAlchemy implementation of IdentityRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tollgate.domain.shared.time import as_utc
from tollgate_identity.domain.identity import (
    Identity,
    IdentityProjection,
    IdentityRepository,
    NewIdentity,
    StoreFailure,
    UserRole,
    normalize_email,
)
from tollgate_identity.infrastructure.persistence.sqlalchemy.models import (
    IdentityModel,
)

logger = logging.getLogger(__name__)


class IdentityRepositorySQLAlchemy(IdentityRepository):
    """SQLAlchemy implementation of the IdentityRepository interface.

    Writes are flushed but never committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Identity | None:
        stmt = select(IdentityModel).where(
            IdentityModel.email == normalize_email(email),
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Identity lookup failed: %s", type(e).__name__)
            msg = "Identity lookup failed"
            raise StoreFailure(msg) from e

        if model is None:
            return None

        return self._map_to_domain(model)

    async def insert(self, identity: NewIdentity) -> IdentityProjection:
        model = IdentityModel(
            name=identity.name,
            email=identity.email,
            password_hash=identity.password_hash,
            role=identity.role.value,
        )

        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            logger.warning("Identity insert rejected by a constraint")
            msg = "Identity insert violated a storage constraint"
            raise StoreFailure(msg, integrity_violation=True) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("Identity insert failed: %s", type(e).__name__)
            msg = "Identity insert failed"
            raise StoreFailure(msg) from e

        logger.debug("Inserted identity: %s", model.id)
        return IdentityProjection(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            created_at=as_utc(model.created_at),
        )

    async def update_password_hash(self, identity_id: UUID, password_hash: str) -> None:
        try:
            model = await self._session.get(IdentityModel, identity_id)
            if model is None:
                return
            model.password_hash = password_hash
            await self._session.flush()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Password hash update failed: %s", type(e).__name__)
            msg = "Password hash update failed"
            raise StoreFailure(msg) from e

        logger.debug("Updated password hash for identity: %s", identity_id)

    def _map_to_domain(self, model: IdentityModel) -> Identity:
        return Identity.reconstitute(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            role=model.role,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
