from juander.domain.registration.repositories.pending_registration_repository import (
    PendingRegistrationRepository,
)

__all__ = ["PendingRegistrationRepository"]
