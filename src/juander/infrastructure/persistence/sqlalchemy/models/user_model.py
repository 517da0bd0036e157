"""SQLAlchemy model for User aggregate."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Date, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from juander.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class UserModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting User aggregates.

    The unique constraint on email is the authoritative guard against
    duplicate accounts; application checks are only a fast path.

    The otp_* columns hold at most one one-time code (hashed) for either
    password reset or email change.

    Table: users
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="tourist")
    is_verified: Mapped[bool] = mapped_column(default=False)

    # One-time code
    otp_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    otp_purpose: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    otp_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    otp_failed_attempts: Mapped[int] = mapped_column(Integer, default=0)
    otp_target_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Profile
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    birthday: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    language: Mapped[str] = mapped_column(String(5), default="en")
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    profile_completed: Mapped[bool] = mapped_column(default=False)

    # Federation
    auth_provider: Mapped[str] = mapped_column(String(20), default="local")
    google_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Onboarding flags
    has_completed_tour: Mapped[bool] = mapped_column(default=False)
    tour_completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    hide_fort_santiago_modal: Mapped[bool] = mapped_column(default=False)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"
