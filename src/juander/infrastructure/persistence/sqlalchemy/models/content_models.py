"""Owned content tables.

Only the columns needed to find and delete a user's content are modelled
here; the itinerary and review features themselves live elsewhere.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from juander.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class ItineraryModel(Base, TimestampMixin):
    __tablename__ = "itineraries"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    created_by: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ItineraryModel(id={self.id}, created_by={self.created_by})>"


class ReviewModel(Base, TimestampMixin):
    __tablename__ = "reviews"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    itinerary_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ReviewModel(id={self.id}, user_id={self.user_id})>"
