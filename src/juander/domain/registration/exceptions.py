"""Registration domain exceptions."""

from juander.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
)


class PendingRegistrationNotFoundError(EntityNotFoundError):
    """No registration draft exists for the email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Pending registration not found",
            ErrorCode.PENDING_REGISTRATION_NOT_FOUND,
            {"email": email},
        )


class RegistrationInProgressError(ConflictError):
    """Another request created a draft for the same email concurrently."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "A registration for this email is already in progress",
            ErrorCode.REGISTRATION_IN_PROGRESS,
            {"email": email},
        )
