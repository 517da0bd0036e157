"""User domain - the durable identity record.

This domain handles:
- User aggregate (identity, role, verification, profile attributes)
- One-time codes attached to an account (password reset, email change)
- Access policy (admin and super-admin capability checks)

Design notes:
- User ID is a random UUID4 generated at creation
- Email is unique, compared exactly as stored
- Password hashes are kept by juander_auth, not on the aggregate
- Repository interface defined here, implementation in infrastructure
"""

from juander.domain.user.aggregates import User
from juander.domain.user.exceptions import (
    ConfirmationMismatchError,
    EmailAlreadyExistsError,
    EmailInUseError,
    EmailVerificationRequiredError,
    InvalidEmailError,
    InvalidProfileValueError,
    PasswordNotSupportedError,
    ProfileIncompleteError,
    SuperAdminRoleLockedError,
    UserNotFoundError,
)
from juander.domain.user.repositories import UserRepository
from juander.domain.user.services import AccessPolicy
from juander.domain.user.value_objects import (
    AuthProvider,
    Email,
    Gender,
    OneTimeCode,
    OneTimeCodePurpose,
    UserRole,
)

__all__ = [
    "AccessPolicy",
    "AuthProvider",
    "ConfirmationMismatchError",
    "Email",
    "EmailAlreadyExistsError",
    "EmailInUseError",
    "EmailVerificationRequiredError",
    "Gender",
    "InvalidEmailError",
    "InvalidProfileValueError",
    "OneTimeCode",
    "OneTimeCodePurpose",
    "PasswordNotSupportedError",
    "ProfileIncompleteError",
    "SuperAdminRoleLockedError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
]
