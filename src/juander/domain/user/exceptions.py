"""User domain exceptions."""

from juander.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when an email address is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidProfileValueError(ValidationError):
    """Raised when a profile attribute (birthday, gender, ...) is rejected."""

    def __init__(self, message: str, field: str) -> None:
        self.field = field
        super().__init__(message, ErrorCode.INVALID_PROFILE_VALUE, {"field": field})


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email is already registered",
            ErrorCode.EMAIL_ALREADY_EXISTS,
            {"email": email},
        )


class EmailInUseError(ValidationError):
    """Email belongs to another account (profile and email-change flows)."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email is already in use",
            ErrorCode.EMAIL_IN_USE,
            {"email": email},
        )


class EmailVerificationRequiredError(ValidationError):
    """A new email must be confirmed with a code sent to it."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Verify the new email with the code sent to it to change your email",
            ErrorCode.EMAIL_VERIFICATION_REQUIRED,
            {"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            "User not found",
            ErrorCode.USER_NOT_FOUND,
            {"identifier": identifier},
        )


class ProfileIncompleteError(ValidationError):
    """Required profile fields are missing."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            "Please complete all required fields",
            ErrorCode.PROFILE_INCOMPLETE,
            {"missing_fields": missing_fields},
        )


class ConfirmationMismatchError(ValidationError):
    """Deactivation confirmation phrase did not match."""

    def __init__(self, expected: str) -> None:
        super().__init__(
            f"Invalid confirmation. Please type {expected} to confirm.",
            ErrorCode.CONFIRMATION_MISMATCH,
        )


class PasswordNotSupportedError(ValidationError):
    """Password operations on an account that signs in with a provider."""

    def __init__(self) -> None:
        super().__init__(
            "This account signs in with Google and has no password",
            ErrorCode.PASSWORD_NOT_SUPPORTED,
        )


class SuperAdminRoleLockedError(ValidationError):
    """The super-admin account's role cannot be lowered."""

    def __init__(self) -> None:
        super().__init__(
            "The super admin role cannot be changed",
            ErrorCode.SUPER_ADMIN_ROLE_LOCKED,
        )
