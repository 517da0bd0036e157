"""SQLAlchemy implementation of OwnedContentRepository."""

import logging
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from juander.domain.content import DeletedContentSummary, OwnedContentRepository
from juander.infrastructure.persistence.sqlalchemy.models import (
    ItineraryModel,
    ReviewModel,
)

logger = logging.getLogger(__name__)


class OwnedContentRepositorySQLAlchemy(OwnedContentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def delete_owned_by(self, user_id: UUID) -> DeletedContentSummary:
        reviews = await self._session.execute(
            delete(ReviewModel)
            .where(ReviewModel.user_id == user_id)
            .execution_options(synchronize_session=False),
        )
        itineraries = await self._session.execute(
            delete(ItineraryModel)
            .where(ItineraryModel.created_by == user_id)
            .execution_options(synchronize_session=False),
        )
        summary = DeletedContentSummary(
            itineraries=itineraries.rowcount,
            reviews=reviews.rowcount,
        )
        logger.info(
            "Deleted content of user %s: %d itineraries, %d reviews",
            user_id,
            summary.itineraries,
            summary.reviews,
        )
        return summary
