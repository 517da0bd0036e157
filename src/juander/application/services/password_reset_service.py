"""Password reset with an emailed one-time code."""

import asyncio
import logging

from juander.application.services.one_time_code_engine import OneTimeCodeEngine
from juander.domain.user import (
    OneTimeCodePurpose,
    PasswordNotSupportedError,
    User,
    UserNotFoundError,
    UserRepository,
)
from juander_auth.repositories import UserCredentialRepository
from juander_auth.services import PasswordHashingService

logger = logging.getLogger(__name__)


class PasswordResetService:
    def __init__(
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        code_engine: OneTimeCodeEngine,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._code_engine = code_engine

    async def _find_local_user(self, email: str) -> User:
        user = await self._user_repo.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        if user.is_federated:
            raise PasswordNotSupportedError
        return user

    async def request_reset(self, email: str) -> None:
        """
        Email a password reset code.

        Issuing a new code replaces any code the account already had.

        Raises
        ------
        UserNotFoundError
            If no account uses the email
        PasswordNotSupportedError
            If the account signs in with Google
        EmailDeliveryError
            If the code could not be sent
        """
        user = await self._find_local_user(email)

        plaintext, code = await self._code_engine.issue(
            OneTimeCodePurpose.PASSWORD_RESET,
        )
        user.attach_one_time_code(code)
        await self._user_repo.save(user)

        await self._code_engine.deliver(
            user.email,
            plaintext,
            OneTimeCodePurpose.PASSWORD_RESET,
        )
        logger.info("Password reset requested for user %s", user.id)

    async def reset_password(self, email: str, code: str, new_password: str) -> None:
        """
        Replace the password after checking the reset code.

        A successful reset also lifts any login lockout.

        Raises
        ------
        WeakPasswordError
            If the new password doesn't meet requirements
        UserNotFoundError
            If no account uses the email
        InvalidCodeError
            If the code is wrong, expired, exhausted or already used
        """
        self._password_service.validate_strength(new_password)
        user = await self._find_local_user(email)

        await self._code_engine.redeem(
            user,
            code,
            OneTimeCodePurpose.PASSWORD_RESET,
            self._user_repo,
        )

        password_hash = await asyncio.to_thread(
            self._password_service.hash,
            new_password,
        )
        await self._credential_repo.save(user.id, password_hash)
        await self._credential_repo.reset_failed_attempts(user.id)
        await self._user_repo.save(user)

        logger.info("Password reset completed for user %s", user.id)
