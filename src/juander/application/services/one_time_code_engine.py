"""Issue, deliver and redeem one-time codes.

The same engine serves registration drafts and existing accounts. A
subject is anything with ``id``, ``one_time_code``, ``clear_one_time_code``
and ``record_failed_code_attempt``; a store is the repository that can
atomically claim that subject's code.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Optional, Protocol
from uuid import UUID

from juander.domain.shared.time import utc_now
from juander.domain.user import OneTimeCode, OneTimeCodePurpose
from juander.infrastructure.email import EmailService
from juander_auth.exceptions import InvalidCodeError
from juander_auth.services import OneTimeCodeService

logger = logging.getLogger(__name__)


class CodeSubject(Protocol):
    @property
    def id(self) -> UUID: ...

    @property
    def one_time_code(self) -> Optional[OneTimeCode]: ...

    def clear_one_time_code(self) -> None: ...

    def record_failed_code_attempt(self) -> None: ...


class CodeStore(Protocol):
    async def claim_one_time_code(self, subject_id: UUID, code_hash: str) -> bool: ...

    async def record_failed_code_attempt(self, subject_id: UUID) -> None: ...


class OneTimeCodeEngine:
    """Short-lived numeric codes gating registration, reset and email change."""

    DEFAULT_EXPIRE_MINUTES = 10
    DEFAULT_MAX_ATTEMPTS = 5

    def __init__(
        self,
        code_service: OneTimeCodeService,
        email_service: EmailService,
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self._code_service = code_service
        self._email_service = email_service
        self._expire = timedelta(minutes=expire_minutes)
        self._max_attempts = max_attempts

    async def issue(
        self,
        purpose: OneTimeCodePurpose,
        target_email: Optional[str] = None,
    ) -> tuple[str, OneTimeCode]:
        """Generate a code.

        Returns
        -------
        The plaintext code (for delivery only) and the hashed code to attach
        """
        plaintext = self._code_service.generate()
        code_hash = await asyncio.to_thread(self._code_service.hash, plaintext)
        code = OneTimeCode(
            code_hash=code_hash,
            purpose=purpose,
            expires_at=utc_now() + self._expire,
            target_email=target_email,
        )
        return plaintext, code

    async def deliver(
        self,
        to_email: str,
        plaintext: str,
        purpose: OneTimeCodePurpose,
    ) -> None:
        """Email the code.

        Raises
        ------
        EmailDeliveryError
            If sending fails. Callers must not commit the issued code then.
        """
        await asyncio.to_thread(
            self._email_service.send_one_time_code,
            to_email,
            plaintext,
            purpose,
        )
        logger.info("Sent %s code to %s", purpose.value, to_email)

    async def redeem(
        self,
        subject: CodeSubject,
        presented_code: str,
        purpose: OneTimeCodePurpose,
        store: CodeStore,
    ) -> OneTimeCode:
        """Validate a presented code and consume it.

        A failure never clears the stored code. A wrong value only bumps the
        attempt counter; once ``max_attempts`` is reached the code stops
        validating until a new one is issued.

        Returns
        -------
        The consumed code (callers read ``target_email`` from it)

        Raises
        ------
        InvalidCodeError
            For every kind of failure, with the same message
        """
        code = subject.one_time_code

        if code is None or code.purpose != purpose:
            raise InvalidCodeError
        if code.is_expired() or code.attempts_exhausted(self._max_attempts):
            raise InvalidCodeError

        matches = await asyncio.to_thread(
            self._code_service.verify,
            presented_code,
            code.code_hash,
        )
        if not matches:
            await store.record_failed_code_attempt(subject.id)
            subject.record_failed_code_attempt()
            logger.info("Wrong %s code presented for %s", purpose.value, subject.id)
            raise InvalidCodeError

        # The conditional clear decides between concurrent redeemers
        if not await store.claim_one_time_code(subject.id, code.code_hash):
            logger.info("%s code for %s was already used", purpose.value, subject.id)
            raise InvalidCodeError

        subject.clear_one_time_code()
        return code
