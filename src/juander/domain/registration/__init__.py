"""Registration domain - drafts awaiting one-time code confirmation."""

from juander.domain.registration.aggregates import PendingRegistration
from juander.domain.registration.exceptions import (
    PendingRegistrationNotFoundError,
    RegistrationInProgressError,
)
from juander.domain.registration.repositories import PendingRegistrationRepository

__all__ = [
    "PendingRegistration",
    "PendingRegistrationNotFoundError",
    "PendingRegistrationRepository",
    "RegistrationInProgressError",
]
