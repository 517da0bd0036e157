"""SQLAlchemy implementation of PendingRegistrationRepository."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from juander.domain.registration import (
    PendingRegistration,
    PendingRegistrationRepository,
    RegistrationInProgressError,
)
from juander.domain.shared.time import ensure_tz_aware
from juander.domain.user import OneTimeCode, OneTimeCodePurpose
from juander.infrastructure.persistence.sqlalchemy.models import (
    PendingRegistrationModel,
)

logger = logging.getLogger(__name__)


class PendingRegistrationRepositorySQLAlchemy(PendingRegistrationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, draft_id: UUID) -> Optional[PendingRegistration]:
        model = await self._session.get(PendingRegistrationModel, draft_id)
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Optional[PendingRegistration]:
        stmt = select(PendingRegistrationModel).where(
            PendingRegistrationModel.email == email.strip(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def save(self, draft: PendingRegistration) -> None:
        code = draft.one_time_code
        if code is None:
            msg = "A pending registration cannot be stored without a code"
            raise ValueError(msg)

        model = await self._session.get(PendingRegistrationModel, draft.id)
        try:
            if model is None:
                model = PendingRegistrationModel(
                    id=draft.id,
                    created_at=draft.created_at,
                )
                self._session.add(model)
                logger.info("Created pending registration for %s", draft.email)

            model.email = draft.email
            model.first_name = draft.first_name
            model.last_name = draft.last_name
            model.password_hash = draft.password_hash
            model.otp_hash = code.code_hash
            model.otp_expires_at = code.expires_at
            model.otp_failed_attempts = code.failed_attempts

            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise RegistrationInProgressError(draft.email) from e
            raise

    async def delete(self, draft_id: UUID) -> bool:
        stmt = delete(PendingRegistrationModel).where(
            PendingRegistrationModel.id == draft_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete_by_email(self, email: str) -> int:
        stmt = delete(PendingRegistrationModel).where(
            PendingRegistrationModel.email == email.strip(),
        )
        result = await self._session.execute(stmt)
        if result.rowcount:
            logger.debug("Discarded %d previous draft(s) for %s", result.rowcount, email)
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(PendingRegistrationModel)
            .where(PendingRegistrationModel.otp_expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def claim_one_time_code(self, draft_id: UUID, code_hash: str) -> bool:
        stmt = delete(PendingRegistrationModel).where(
            PendingRegistrationModel.id == draft_id,
            PendingRegistrationModel.otp_hash == code_hash,
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def record_failed_code_attempt(self, draft_id: UUID) -> None:
        stmt = (
            update(PendingRegistrationModel)
            .where(PendingRegistrationModel.id == draft_id)
            .values(
                otp_failed_attempts=PendingRegistrationModel.otp_failed_attempts + 1,
            )
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    def _map_to_domain(self, model: PendingRegistrationModel) -> PendingRegistration:
        return PendingRegistration.reconstitute(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            password_hash=model.password_hash,
            one_time_code=OneTimeCode(
                code_hash=model.otp_hash,
                purpose=OneTimeCodePurpose.REGISTRATION,
                expires_at=ensure_tz_aware(model.otp_expires_at),
                failed_attempts=model.otp_failed_attempts or 0,
            ),
            created_at=ensure_tz_aware(model.created_at),
        )
