"""Password and Google sign-in, and session token issuance."""

import asyncio
import logging
from typing import Optional

from juander.domain.user import AccessPolicy, User, UserRepository, UserRole
from juander_auth import (
    FederatedIdentity,
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
    TokenPayload,
)
from juander_auth.repositories import UserCredentialRepository

logger = logging.getLogger(__name__)


def split_display_name(name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split "Juan Dela Cruz" into ("Juan", "Dela Cruz")."""
    parts = (name or "").split()
    if not parts:
        return None, None
    return parts[0], " ".join(parts[1:]) or None


class AuthenticationService:
    """Authenticate users and mint session tokens.

    Every failure of a password login raises the same
    InvalidCredentialsError, whether the email is unknown, the password is
    wrong, the account has no password or the account is locked.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        access_policy: AccessPolicy,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._access_policy = access_policy

    def create_token(self, user: User) -> str:
        return self._jwt_service.create_access_token(
            user_id=user.id,
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    def verify_token(self, token: str) -> TokenPayload:
        return self._jwt_service.verify_token(token)

    async def _spend_verification(self, password: str) -> None:
        # Failures without a hash to check cost the same as a wrong password
        await asyncio.to_thread(self._password_service.verify_dummy, password)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Authenticate with email and password.

        Parameters
        ----------
        email
            User's email address
        password
            User's plaintext password

        Returns
        -------
        Tuple of (user, token)

        Raises
        ------
        InvalidCredentialsError
            If the login fails for any reason
        """
        user = await self._user_repo.find_by_email(email)
        if user is None:
            logger.info("Login attempt for unknown email")
            await self._spend_verification(password)
            raise InvalidCredentialsError

        credential = await self._credential_repo.find_by_user_id(user.id)
        if credential is None:
            logger.info("Password login attempt for federated user %s", user.id)
            await self._spend_verification(password)
            raise InvalidCredentialsError

        is_locked, locked_until = await self._credential_repo.is_account_locked(
            user.id,
        )
        if is_locked:
            logger.warning(
                "Login attempt for locked user %s (until %s)", user.id, locked_until
            )
            await self._spend_verification(password)
            raise InvalidCredentialsError

        password_ok = await asyncio.to_thread(
            self._password_service.verify,
            password,
            credential.password_hash,
        )
        if not password_ok:
            attempts = await self._credential_repo.increment_failed_attempts(user.id)
            logger.info("Failed login for user %s (%d attempts)", user.id, attempts)
            raise InvalidCredentialsError

        await self._credential_repo.reset_failed_attempts(user.id)
        await self._credential_repo.update_last_login(user.id)

        if self._password_service.needs_rehash(credential.password_hash):
            new_hash = await asyncio.to_thread(self._password_service.hash, password)
            await self._credential_repo.save(user.id, new_hash)
            logger.info("Rehashed password for user %s", user.id)

        logger.info("User logged in: %s", user.id)
        return user, self.create_token(user)

    async def login_with_google(self, identity: FederatedIdentity) -> tuple[User, str]:
        """
        Sign in with an already verified Google identity.

        Creates the account on first sign-in, otherwise links it. The
        super-admin gets the admin role re-granted; an existing admin is
        never downgraded.

        Returns
        -------
        Tuple of (user, token)

        Raises
        ------
        EmailAlreadyExistsError
            If a concurrent request created the account first
        """
        user = await self._user_repo.find_by_email(identity.email)

        if user is None:
            first_name, last_name = split_display_name(identity.name)
            user = User.create_federated(
                email=identity.email,
                google_id=identity.subject,
                first_name=first_name,
                last_name=last_name,
                profile_picture=identity.picture,
                role=self._access_policy.initial_role_for(identity.email),
            )
            logger.info("Created Google user %s", user.id)
        else:
            user.link_google_account(identity.subject)
            if user.is_federated:
                user.sync_profile_picture(identity.picture)
            if self._access_policy.is_super_admin(user) and user.role != UserRole.ADMIN:
                user.change_role(UserRole.ADMIN)
                logger.info("Re-granted admin role to super admin %s", user.id)

        await self._user_repo.save(user)
        return user, self.create_token(user)
