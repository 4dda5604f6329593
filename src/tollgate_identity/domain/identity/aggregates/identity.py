"""Identity aggregate and the data shapes that travel with it."""

from dataclasses import dataclass
from datetime import datetime
from typing import Union
from uuid import UUID

from tollgate_identity.domain.identity.value_objects import UserRole, normalize_email


@dataclass(frozen=True)
class NewIdentity:
    """An identity about to be inserted. The store assigns id and timestamps."""

    name: str | None
    email: str
    password_hash: str
    role: UserRole = UserRole.USER

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", normalize_email(self.email))

    def __repr__(self) -> str:
        return f"NewIdentity(email={self.email}, role={self.role.value})"


@dataclass(frozen=True)
class IdentityProjection:
    """The non-secret view of an identity returned to callers."""

    id: UUID
    name: str | None
    email: str
    role: UserRole
    created_at: datetime


class Identity:
    """
    Identity aggregate root.

    A registered principal together with its password hash. Only the
    projection ever leaves the application layer.
    """

    def __init__(
        self,
        id: UUID,
        email: str,
        password_hash: str,
        created_at: datetime,
        updated_at: datetime,
        name: str | None = None,
        role: Union[str, UserRole] = UserRole.USER,
    ):
        self._id = id
        self._name = name
        self._email = normalize_email(email)
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._created_at = created_at
        self._updated_at = updated_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def projection(self) -> IdentityProjection:
        return IdentityProjection(
            id=self._id,
            name=self._name,
            email=self._email,
            role=self._role,
            created_at=self._created_at,
        )

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        name: str | None,
        email: str,
        password_hash: str,
        role: Union[str, UserRole],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Identity":
        return cls(
            id=id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identity):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Identity(id={self._id}, email={self._email})"
