"""Authentication services.

Provides password hashing, one-time code hashing and session token management.
"""

from juander_auth.services.jwt_service import JWTService
from juander_auth.services.one_time_code_service import OneTimeCodeService
from juander_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "OneTimeCodeService",
    "PasswordHashingService",
]
