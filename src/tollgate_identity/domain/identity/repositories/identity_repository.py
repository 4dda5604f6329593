"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tollgate_identity.domain.identity.aggregates import (
    Identity,
    IdentityProjection,
    NewIdentity,
)


class IdentityRepository(ABC):
    """Repository interface for Identity aggregates.

    Implementations raise StoreFailure for any storage-level error.
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Identity]:
        """Find an identity by its (normalized) email address."""

    @abstractmethod
    async def insert(self, identity: NewIdentity) -> IdentityProjection:
        """Insert a new identity and return its non-secret projection."""

    @abstractmethod
    async def update_password_hash(self, identity_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash of an identity; unknown ids are ignored."""
