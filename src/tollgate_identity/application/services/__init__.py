from tollgate_identity.application.services.registration_service import (
    RegistrationService,
)

__all__ = [
    "RegistrationService",
]
