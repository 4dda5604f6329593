"""API request/response schemas."""

from tollgate.presentation.api.schemas.auth import (
    IdentityResponse,
    MessageResponse,
    SessionResponse,
)

__all__ = [
    "IdentityResponse",
    "MessageResponse",
    "SessionResponse",
]
