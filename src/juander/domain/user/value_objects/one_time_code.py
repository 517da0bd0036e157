"""One-time code attached to a draft or an account."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from juander.domain.shared.time import ensure_tz_aware, utc_now


class OneTimeCodePurpose(str, Enum):
    REGISTRATION = "registration"
    PASSWORD_RESET = "password_reset"
    EMAIL_CHANGE = "email_change"


@dataclass(frozen=True)
class OneTimeCode:
    """A hashed short-lived code.

    Attributes
    ----------
    code_hash
        Salted hash of the 6-digit code (the plaintext is never stored)
    purpose
        Which flow the code was issued for
    expires_at
        The code is only valid strictly before this instant
    failed_attempts
        Wrong codes presented so far
    target_email
        For email changes, the address the code was sent to
    """

    code_hash: str
    purpose: OneTimeCodePurpose
    expires_at: datetime
    failed_attempts: int = 0
    target_email: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or utc_now()
        return now >= ensure_tz_aware(self.expires_at)

    def attempts_exhausted(self, max_attempts: int) -> bool:
        return self.failed_attempts >= max_attempts

    def with_failed_attempt(self) -> "OneTimeCode":
        return replace(self, failed_attempts=self.failed_attempts + 1)
