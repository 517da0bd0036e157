"""Email change (and email verification) for the signed-in user."""

import logging
from typing import Optional

from juander.application.services.one_time_code_engine import OneTimeCodeEngine
from juander.domain.user import (
    Email,
    EmailInUseError,
    OneTimeCodePurpose,
    User,
    UserRepository,
)
from juander_auth.exceptions import InvalidCodeError

logger = logging.getLogger(__name__)


class EmailChangeService:
    """Send a code to an address and apply it once the code comes back.

    The code remembers the address it was sent to, so a code mailed to one
    address can never be used to switch the account to another one.
    """

    def __init__(self, user_repository: UserRepository, code_engine: OneTimeCodeEngine):
        self._user_repo = user_repository
        self._code_engine = code_engine

    async def _ensure_available(self, user: User, email: str) -> None:
        owner = await self._user_repo.find_by_email(email)
        if owner is not None and owner.id != user.id:
            raise EmailInUseError(email)

    async def request_change(self, user: User, new_email: str) -> None:
        """
        Email a verification code to ``new_email``.

        Raises
        ------
        EmailInUseError
            If another account uses the address (checked before any code
            is generated)
        EmailDeliveryError
            If the code could not be sent
        """
        email = Email(new_email).value
        await self._ensure_available(user, email)

        plaintext, code = await self._code_engine.issue(
            OneTimeCodePurpose.EMAIL_CHANGE,
            target_email=email,
        )
        user.attach_one_time_code(code)
        await self._user_repo.save(user)

        await self._code_engine.deliver(email, plaintext, OneTimeCodePurpose.EMAIL_CHANGE)
        logger.info("Email verification code sent for user %s", user.id)

    async def confirm_change(
        self,
        user: User,
        code: str,
        new_email: Optional[str] = None,
    ) -> User:
        """
        Check the code, apply ``new_email`` if given, and mark the email verified.

        Raises
        ------
        InvalidCodeError
            If the code is invalid, or was sent to a different address than
            ``new_email``
        EmailInUseError
            If another account took the address in the meantime
        """
        target_email = None
        if new_email:
            target_email = Email(new_email).value
            pending = user.one_time_code
            if pending is None or pending.target_email != target_email:
                raise InvalidCodeError
            await self._ensure_available(user, target_email)

        await self._code_engine.redeem(
            user,
            code,
            OneTimeCodePurpose.EMAIL_CHANGE,
            self._user_repo,
        )

        if target_email and target_email != user.email:
            user.change_email(target_email)
            logger.info("User %s changed email", user.id)
        user.mark_verified()

        await self._user_repo.save(user)
        return user
