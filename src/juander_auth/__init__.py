"""Juander Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the tourism domain. It handles:
- Password hashing (argon2)
- One-time code generation and hashing (bcrypt)
- Session token creation and verification (JWT)
- User credential storage (with pluggable persistence)

Architecture:
    juander_auth/
    ├── services/           # Pure logic (password hashing, codes, JWT)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from juander_auth import PasswordHashingService, JWTService

    from juander_auth.persistence.sqlalchemy import (
        UserCredentialRepositorySQLAlchemy,
        UserCredentialModel,
        AuthBase,
    )
"""

from juander_auth.exceptions import (
    AuthError,
    FederationVerificationError,
    InvalidCodeError,
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)
from juander_auth.repositories import UserCredentialData, UserCredentialRepository
from juander_auth.schemas import FederatedIdentity, TokenPayload
from juander_auth.services import (
    JWTService,
    OneTimeCodeService,
    PasswordHashingService,
)

__all__ = [
    # Services
    "JWTService",
    "OneTimeCodeService",
    "PasswordHashingService",
    # Repositories (interfaces)
    "UserCredentialData",
    "UserCredentialRepository",
    # Schemas
    "FederatedIdentity",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "FederationVerificationError",
    "InvalidCodeError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "WeakPasswordError",
]
