"""SQLAlchemy implementation of UserCredentialRepository.

Stores argon2 hashes of local accounts and applies the configured
failed-login lockout.
"""

import logging
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juander.domain.shared.time import ensure_tz_aware, utc_now
from juander_auth.persistence.sqlalchemy.models import UserCredentialModel
from juander_auth.repositories import UserCredentialData, UserCredentialRepository

logger = logging.getLogger(__name__)


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    """
    SQLAlchemy implementation of UserCredentialRepository.

    Lock threshold and duration come from LOGIN_MAX_FAILED_ATTEMPTS and
    LOGIN_LOCKOUT_MINUTES via the constructor.
    """

    def __init__(
        self,
        session: AsyncSession,
        max_failed_attempts: int | None = None,
        lockout_minutes: int | None = None,
    ):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        max_failed_attempts
            Failed logins before the account is locked (class default if None)
        lockout_minutes
            How long a lock lasts (class default if None)
        """
        self._session = session
        if max_failed_attempts is not None:
            self.MAX_FAILED_ATTEMPTS = max_failed_attempts
        if lockout_minutes is not None:
            self.LOCKOUT_DURATION_MINUTES = lockout_minutes

    def _to_data(self, model: UserCredentialModel) -> UserCredentialData:
        """Map SQLAlchemy model to data transfer object."""
        return UserCredentialData(
            user_id=model.user_id,
            password_hash=model.password_hash,
            failed_login_attempts=model.failed_login_attempts,
            locked_until=(
                ensure_tz_aware(model.locked_until) if model.locked_until else None
            ),
            last_login_at=(
                ensure_tz_aware(model.last_login_at) if model.last_login_at else None
            ),
        )

    async def _find_model_by_user_id(self, user_id: UUID) -> UserCredentialModel | None:
        stmt = select(UserCredentialModel).where(
            UserCredentialModel.user_id == str(user_id),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(
        self,
        user_id: UUID,
        password_hash: str,
    ) -> UserCredentialData:
        existing = await self._find_model_by_user_id(user_id)

        if existing:
            existing.password_hash = password_hash
            existing.updated_at = utc_now()
            logger.debug("Updated credentials for user: %s", user_id)
            await self._session.flush()
            return self._to_data(existing)

        model = UserCredentialModel(
            user_id=str(user_id),
            password_hash=password_hash,
            failed_login_attempts=0,
        )
        self._session.add(model)
        await self._session.flush()
        logger.info("Created credentials for user: %s", user_id)
        return self._to_data(model)

    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        model = await self._find_model_by_user_id(user_id)
        return self._to_data(model) if model else None

    async def increment_failed_attempts(self, user_id: UUID) -> int:
        credential = await self._find_model_by_user_id(user_id)
        if not credential:
            return 0

        credential.failed_login_attempts += 1
        credential.updated_at = utc_now()

        # Lock account if too many failed attempts
        if credential.failed_login_attempts >= self.MAX_FAILED_ATTEMPTS:
            credential.locked_until = utc_now() + timedelta(
                minutes=self.LOCKOUT_DURATION_MINUTES,
            )
            logger.warning(
                "Account locked for user %s due to %d failed attempts",
                user_id,
                credential.failed_login_attempts,
            )

        await self._session.flush()
        return credential.failed_login_attempts

    async def reset_failed_attempts(self, user_id: UUID) -> None:
        credential = await self._find_model_by_user_id(user_id)
        if credential:
            credential.failed_login_attempts = 0
            credential.locked_until = None
            credential.updated_at = utc_now()
            await self._session.flush()

    async def update_last_login(self, user_id: UUID) -> None:
        credential = await self._find_model_by_user_id(user_id)
        if credential:
            credential.last_login_at = utc_now()
            credential.updated_at = utc_now()
            await self._session.flush()

    async def delete(self, user_id: UUID) -> bool:
        credential = await self._find_model_by_user_id(user_id)
        if credential:
            await self._session.delete(credential)
            await self._session.flush()
            logger.info("Deleted credentials for user: %s", user_id)
            return True
        return False

    async def is_account_locked(self, user_id: UUID) -> tuple[bool, datetime | None]:
        credential = await self._find_model_by_user_id(user_id)
        if not credential or credential.locked_until is None:
            return False, None

        locked_until = ensure_tz_aware(credential.locked_until)
        if locked_until > utc_now():
            return True, locked_until

        return False, None
