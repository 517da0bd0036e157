"""Profile attributes, account details and profile completion."""

import asyncio
import logging
from typing import Optional

from juander.domain.user import (
    Email,
    EmailVerificationRequiredError,
    Gender,
    PasswordNotSupportedError,
    User,
    UserRepository,
)
from juander.domain.user.value_objects import (
    parse_birthday,
    parse_country,
    parse_language,
)
from juander_auth.repositories import UserCredentialRepository
from juander_auth.services import PasswordHashingService

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service

    async def update_account(  # NOQA: PLR0913
        self,
        user: User,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Update name and password. Omitted values are left unchanged.

        The email may be sent back unchanged. A different address is only
        taken over through EmailChangeService, once the code sent to it is
        confirmed.

        Raises
        ------
        PasswordNotSupportedError
            If a password is given for a Google account
        WeakPasswordError
            If the password doesn't meet requirements
        EmailVerificationRequiredError
            If the email differs from the current one
        """
        if email is not None:
            new_email = Email(email).value
            if new_email != user.email:
                raise EmailVerificationRequiredError(new_email)

        if password is not None:
            if user.is_federated:
                raise PasswordNotSupportedError
            self._password_service.validate_strength(password)

        user.update_name(first_name=first_name, last_name=last_name)
        await self._user_repo.save(user)

        if password is not None:
            password_hash = await asyncio.to_thread(self._password_service.hash, password)
            await self._credential_repo.save(user.id, password_hash)

        logger.info("Account updated for user %s", user.id)
        return user

    async def update_birthday(self, user: User, month: str, day: int, year: int) -> User:
        user.set_birthday(parse_birthday(month, day, year))
        await self._user_repo.save(user)
        return user

    async def update_gender(self, user: User, gender: str) -> User:
        user.set_gender(Gender.parse(gender))
        await self._user_repo.save(user)
        return user

    async def update_country(self, user: User, country: str) -> User:
        user.set_country(parse_country(country))
        await self._user_repo.save(user)
        return user

    async def update_language(self, user: User, language: str) -> User:
        user.set_language(parse_language(language))
        await self._user_repo.save(user)
        return user

    async def complete_profile(self, user: User) -> User:
        """
        Mark the profile complete. Idempotent once completed.

        Raises
        ------
        ProfileIncompleteError
            Listing the missing fields
        """
        already_completed = user.profile_completed
        user.complete_profile()
        if not already_completed:
            await self._user_repo.save(user)
            logger.info("Profile completed for user %s", user.id)
        return user
