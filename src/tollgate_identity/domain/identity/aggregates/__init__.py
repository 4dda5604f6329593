from tollgate_identity.domain.identity.aggregates.identity import (
    Identity,
    IdentityProjection,
    NewIdentity,
)

__all__ = [
    "Identity",
    "IdentityProjection",
    "NewIdentity",
]
