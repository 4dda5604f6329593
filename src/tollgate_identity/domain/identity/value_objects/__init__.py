from tollgate_identity.domain.identity.value_objects.email import normalize_email
from tollgate_identity.domain.identity.value_objects.user_role import UserRole

__all__ = [
    "UserRole",
    "normalize_email",
]
