from juander.domain.registration.aggregates.pending_registration import (
    PendingRegistration,
)

__all__ = ["PendingRegistration"]
