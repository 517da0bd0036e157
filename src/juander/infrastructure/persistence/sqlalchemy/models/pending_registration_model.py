"""SQLAlchemy model for registration drafts."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from juander.domain.shared.time import utc_now
from juander.infrastructure.persistence.sqlalchemy.models.base import Base


class PendingRegistrationModel(Base):
    """
    Registration awaiting code confirmation.

    email is unique so two concurrent registrations cannot both leave a
    draft behind. Rows past otp_expires_at are removed by the purge task.

    Table: pending_registrations
    """

    __tablename__ = "pending_registrations"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    otp_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    otp_expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    otp_failed_attempts: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<PendingRegistrationModel(id={self.id}, email={self.email})>"
