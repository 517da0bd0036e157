"""FastAPI dependency injection for the Juander API.

Provides dependencies for:
- Database sessions and the request transaction
- Authentication (current user from JWT) and access checks
- Service instances
"""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated, AsyncGenerator, AsyncIterator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from juander.application.services import (
    AccountDeactivationService,
    AccountService,
    AuthenticationService,
    EmailChangeService,
    OneTimeCodeEngine,
    PasswordResetService,
    RegistrationService,
)
from juander.domain.user import AccessPolicy, User
from juander.infrastructure.email import EmailService
from juander.infrastructure.integration.google import GoogleIdTokenVerifier
from juander.infrastructure.persistence.sqlalchemy.repositories import (
    AuditLogRepositorySQLAlchemy,
    OwnedContentRepositorySQLAlchemy,
    PendingRegistrationRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from juander.presentation.api.config import get_api_settings
from juander_auth import (
    InvalidCodeError,
    InvalidCredentialsError,
    InvalidTokenError,
    JWTService,
    OneTimeCodeService,
    PasswordHashingService,
)
from juander_auth.persistence.sqlalchemy import UserCredentialRepositorySQLAlchemy
from juander_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_settings().database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    FastAPI caches it per request, so every repository built for one
    request shares the same transaction.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


@asynccontextmanager
async def committing(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit the request's work on success and roll it back on failure.

    Wrong codes and failed logins still commit, so the attempt counters they
    bumped are kept.
    """
    try:
        yield session
    except (InvalidCodeError, InvalidCredentialsError):
        await session.commit()
        raise
    except Exception:
        await session.rollback()
        raise
    await session.commit()


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def get_code_service(settings: SettingsDep) -> OneTimeCodeService:
    return OneTimeCodeService(rounds=settings.otp_hash_rounds)


def get_email_service(settings: SettingsDep) -> EmailService:
    return EmailService(settings)


def get_code_engine(
    settings: SettingsDep,
    code_service: OneTimeCodeService = Depends(get_code_service),
    email_service: EmailService = Depends(get_email_service),
) -> OneTimeCodeEngine:
    return OneTimeCodeEngine(
        code_service=code_service,
        email_service=email_service,
        expire_minutes=settings.otp_expire_minutes,
        max_attempts=settings.otp_max_attempts,
    )


@lru_cache(maxsize=1)
def get_google_verifier() -> GoogleIdTokenVerifier:
    """
    Get the shared Google ID token verifier (singleton).

    A single instance keeps the fetched signing keys and its HTTP client
    across requests.
    """
    settings = get_settings()
    return GoogleIdTokenVerifier(
        client_id=settings.google_client_id,
        certs_url=settings.google_certs_url,
        timeout=settings.google_certs_timeout,
    )


def get_access_policy(settings: SettingsDep) -> AccessPolicy:
    return AccessPolicy(super_admin_email=settings.super_admin_email)


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]
CodeEngineDep = Annotated[OneTimeCodeEngine, Depends(get_code_engine)]
GoogleVerifierDep = Annotated[GoogleIdTokenVerifier, Depends(get_google_verifier)]
AccessPolicyDep = Annotated[AccessPolicy, Depends(get_access_policy)]


def _credential_repository(
    session: AsyncSession,
    settings: Settings,
) -> UserCredentialRepositorySQLAlchemy:
    return UserCredentialRepositorySQLAlchemy(
        session,
        max_failed_attempts=settings.login_max_failed_attempts,
        lockout_minutes=settings.login_lockout_minutes,
    )


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


async def get_authentication_service(
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
    access_policy: AccessPolicyDep,
) -> AuthenticationService:
    """Get authentication service with all dependencies."""
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=_credential_repository(session, settings),
        password_service=password_service,
        jwt_service=jwt_service,
        access_policy=access_policy,
    )


async def get_registration_service(
    session: DBSession,
    settings: SettingsDep,
    password_service: PasswordServiceDep,
    code_engine: CodeEngineDep,
) -> RegistrationService:
    return RegistrationService(
        user_repository=UserRepositorySQLAlchemy(session),
        pending_repository=PendingRegistrationRepositorySQLAlchemy(session),
        credential_repository=_credential_repository(session, settings),
        password_service=password_service,
        code_engine=code_engine,
    )


async def get_password_reset_service(
    session: DBSession,
    settings: SettingsDep,
    password_service: PasswordServiceDep,
    code_engine: CodeEngineDep,
) -> PasswordResetService:
    return PasswordResetService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=_credential_repository(session, settings),
        password_service=password_service,
        code_engine=code_engine,
    )


async def get_email_change_service(
    session: DBSession,
    code_engine: CodeEngineDep,
) -> EmailChangeService:
    return EmailChangeService(
        user_repository=UserRepositorySQLAlchemy(session),
        code_engine=code_engine,
    )


async def get_account_service(
    session: DBSession,
    settings: SettingsDep,
    password_service: PasswordServiceDep,
) -> AccountService:
    return AccountService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=_credential_repository(session, settings),
        password_service=password_service,
    )


async def get_account_deactivation_service(
    session: DBSession,
    settings: SettingsDep,
    access_policy: AccessPolicyDep,
) -> AccountDeactivationService:
    return AccountDeactivationService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=_credential_repository(session, settings),
        content_repository=OwnedContentRepositorySQLAlchemy(session),
        audit_log_repository=AuditLogRepositorySQLAlchemy(session),
        access_policy=access_policy,
    )


# Type aliases for injected services
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
RegistrationServiceDep = Annotated[
    RegistrationService,
    Depends(get_registration_service),
]
PasswordResetServiceDep = Annotated[
    PasswordResetService,
    Depends(get_password_reset_service),
]
EmailChangeServiceDep = Annotated[EmailChangeService, Depends(get_email_change_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
DeactivationServiceDep = Annotated[
    AccountDeactivationService,
    Depends(get_account_deactivation_service),
]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


async def _load_principal(
    credentials: Optional[HTTPAuthorizationCredentials],
    session: AsyncSession,
    jwt_service: JWTService,
) -> Optional[User]:
    """
    Verify the bearer token and re-load its user.

    The role and name inside the token are never trusted; the stored
    record is.

    Returns
    -------
    The user, or None if the token is valid but the user no longer exists

    Raises
    ------
    HTTPException
        401 if the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt_service.verify_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    user = await UserRepositorySQLAlchemy(session).find_by_id(payload.user_id)
    if user is None:
        logger.warning("User not found for token: %s", payload.user_id)
    return user


async def get_current_user(
    session: DBSession,
    jwt_service: JWTServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """
    FastAPI dependency to get the current authenticated user from JWT.

    Raises
    ------
    HTTPException
        401 if the token is missing or invalid, 404 if its user is gone
    """
    user = await _load_principal(credentials, session, jwt_service)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


# Type alias for injected current user
CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(
    session: DBSession,
    jwt_service: JWTServiceDep,
    access_policy: AccessPolicyDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """Require an admin (role admin or the super admin)."""
    user = await _load_principal(credentials, session, jwt_service)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not access_policy.has_admin_access(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admins only",
        )
    return user


# Type alias for admin user
AdminUser = Annotated[User, Depends(require_admin)]


async def require_super_admin(
    session: DBSession,
    jwt_service: JWTServiceDep,
    access_policy: AccessPolicyDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """Require the configured super admin."""
    user = await _load_principal(credentials, session, jwt_service)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not access_policy.is_super_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super Admin access required",
        )
    return user


SuperAdminUser = Annotated[User, Depends(require_super_admin)]
