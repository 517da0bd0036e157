"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from juander.domain.shared.time import ensure_tz_aware
from juander.domain.user import (
    EmailAlreadyExistsError,
    OneTimeCode,
    OneTimeCodePurpose,
    User,
    UserRepository,
)
from juander.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)

_CLEARED_CODE = {
    "otp_hash": None,
    "otp_purpose": None,
    "otp_expires_at": None,
    "otp_failed_attempts": 0,
    "otp_target_email": None,
}


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.strip())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: str) -> bool:
        user = await self.find_by_email(email)
        return user is not None

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = UserModel(id=user.id)
                self._update_model(model, user)
                model.created_at = user.created_at
                self._session.add(model)
                logger.info("Created user: %s (email: %s)", user.id, user.email)

            await self._session.flush()
        except IntegrityError as e:
            # Unique constraint on email is the authoritative conflict signal
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

    async def delete(self, user_id: UUID) -> bool:
        model = await self._find_model_by_id(user_id)

        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()
        logger.info("Deleted user: %s", user_id)
        return True

    async def claim_one_time_code(self, user_id: UUID, code_hash: str) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.otp_hash == code_hash)
            .values(**_CLEARED_CODE)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def record_failed_code_attempt(self, user_id: UUID) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.otp_hash.is_not(None))
            .values(otp_failed_attempts=UserModel.otp_failed_attempts + 1)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    async def _find_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        one_time_code = None
        if model.otp_hash and model.otp_expires_at and model.otp_purpose:
            one_time_code = OneTimeCode(
                code_hash=model.otp_hash,
                purpose=OneTimeCodePurpose(model.otp_purpose),
                expires_at=ensure_tz_aware(model.otp_expires_at),
                failed_attempts=model.otp_failed_attempts or 0,
                target_email=model.otp_target_email,
            )

        return User.reconstitute(
            id=model.id,
            email=model.email,
            role=model.role,
            auth_provider=model.auth_provider,
            first_name=model.first_name,
            last_name=model.last_name,
            is_verified=model.is_verified,
            one_time_code=one_time_code,
            birthday=model.birthday,
            gender=model.gender,
            country=model.country,
            language=model.language or "en",
            profile_picture=model.profile_picture,
            google_id=model.google_id,
            profile_completed=model.profile_completed,
            has_completed_tour=model.has_completed_tour,
            tour_completed_at=(
                ensure_tz_aware(model.tour_completed_at)
                if model.tour_completed_at
                else None
            ),
            hide_fort_santiago_modal=model.hide_fort_santiago_modal,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.role = user.role.value
        model.auth_provider = user.auth_provider.value
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.is_verified = user.is_verified
        model.birthday = user.birthday
        model.gender = user.gender.value if user.gender else None
        model.country = user.country
        model.language = user.language
        model.profile_picture = user.profile_picture
        model.google_id = user.google_id
        model.profile_completed = user.profile_completed
        model.has_completed_tour = user.has_completed_tour
        model.tour_completed_at = user.tour_completed_at
        model.hide_fort_santiago_modal = user.hide_fort_santiago_modal
        model.updated_at = user.updated_at

        code = user.one_time_code
        if code is None:
            for column, value in _CLEARED_CODE.items():
                setattr(model, column, value)
        else:
            model.otp_hash = code.code_hash
            model.otp_purpose = code.purpose.value
            model.otp_expires_at = code.expires_at
            model.otp_failed_attempts = code.failed_attempts
            model.otp_target_email = code.target_email
