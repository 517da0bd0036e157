"""Registration through a draft confirmed by an emailed code."""

import asyncio
import logging

from juander.application.services.one_time_code_engine import OneTimeCodeEngine
from juander.domain.registration import (
    PendingRegistration,
    PendingRegistrationNotFoundError,
    PendingRegistrationRepository,
)
from juander.domain.user import (
    Email,
    EmailAlreadyExistsError,
    OneTimeCodePurpose,
    User,
    UserRepository,
)
from juander_auth.repositories import UserCredentialRepository
from juander_auth.services import PasswordHashingService

logger = logging.getLogger(__name__)


class RegistrationService:
    """Create registration drafts and promote them into accounts.

    The email uniqueness checks here are a fast path only. The unique
    constraints on users and pending registrations are what actually stop
    duplicates under concurrency.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        pending_repository: PendingRegistrationRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        code_engine: OneTimeCodeEngine,
    ):
        self._user_repo = user_repository
        self._pending_repo = pending_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._code_engine = code_engine

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> PendingRegistration:
        """Start a registration and email the confirmation code.

        Registering again for the same email discards the previous draft,
        which doubles as "resend code".

        Parameters
        ----------
        first_name
            First name for the future account
        last_name
            Last name for the future account
        email
            Email to register
        password
            Plaintext password, hashed before it is stored

        Returns
        -------
        The stored draft

        Raises
        ------
        WeakPasswordError
            If the password doesn't meet requirements
        EmailAlreadyExistsError
            If an account already uses the email
        RegistrationInProgressError
            If a concurrent request stored a draft for the same email
        EmailDeliveryError
            If the code could not be sent
        """
        email_value = Email(email).value
        self._password_service.validate_strength(password)

        if await self._user_repo.exists_by_email(email_value):
            raise EmailAlreadyExistsError(email_value)

        password_hash = await asyncio.to_thread(self._password_service.hash, password)

        await self._pending_repo.delete_by_email(email_value)

        plaintext, code = await self._code_engine.issue(
            OneTimeCodePurpose.REGISTRATION,
        )
        draft = PendingRegistration.create(
            email=email_value,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            one_time_code=code,
        )
        await self._pending_repo.save(draft)

        await self._code_engine.deliver(
            draft.email,
            plaintext,
            OneTimeCodePurpose.REGISTRATION,
        )

        logger.info("Registration started for %s", draft.email)
        return draft

    async def verify(self, email: str, code: str) -> User:
        """Confirm a draft with its code and create the account.

        Raises
        ------
        PendingRegistrationNotFoundError
            If there is no draft for the email
        InvalidCodeError
            If the code is wrong, expired, exhausted or already used
        EmailAlreadyExistsError
            If an account for the email appeared in the meantime
        """
        email_value = Email(email).value
        draft = await self._pending_repo.find_by_email(email_value)
        if draft is None:
            raise PendingRegistrationNotFoundError(email_value)

        # Consumes (deletes) the draft; only one concurrent caller gets past
        await self._code_engine.redeem(
            draft,
            code,
            OneTimeCodePurpose.REGISTRATION,
            self._pending_repo,
        )

        if await self._user_repo.exists_by_email(draft.email):
            raise EmailAlreadyExistsError(draft.email)

        user = draft.promote()
        await self._user_repo.save(user)
        await self._credential_repo.save(user.id, draft.password_hash)

        logger.info("Registration verified, created user %s", user.id)
        return user
