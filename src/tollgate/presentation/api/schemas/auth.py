"""Authentication schemas for response models.

Request bodies are deliberately not modelled here: they are accepted as
plain JSON objects and validated by tollgate_identity so that every field
problem is reported in one 400 response.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tollgate_auth import TokenClaims
from tollgate_identity import IdentityProjection


class IdentityResponse(BaseModel):
    """Response schema for identity data."""

    id: UUID
    name: str | None
    email: str
    role: str
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Ada",
                "email": "ada@example.com",
                "role": "user",
                "createdAt": "2024-12-05T10:30:00Z",
            },
        },
    )

    @classmethod
    def from_projection(cls, identity: IdentityProjection) -> "IdentityResponse":
        return cls(
            id=identity.id,
            name=identity.name,
            email=identity.email,
            role=identity.role.value,
            created_at=identity.created_at,
        )


class SessionResponse(BaseModel):
    """Response schema for the claims of the current session."""

    id: UUID
    email: str
    role: str
    expires_at: datetime = Field(serialization_alias="expiresAt")

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "SessionResponse":
        return cls(
            id=claims.user_id,
            email=claims.email,
            role=claims.role,
            expires_at=claims.expires_at,
        )


class MessageResponse(BaseModel):
    """Response schema for plain acknowledgements."""

    message: str
