"""Integration tests for owned content and audit log repositories."""

from uuid import uuid4

from sqlalchemy import func, select

from juander.domain.content import AuditEntry, DeletedContentSummary
from juander.infrastructure.persistence.sqlalchemy.models import (
    AuditLogModel,
    ItineraryModel,
    ReviewModel,
)
from juander.infrastructure.persistence.sqlalchemy.repositories import (
    AuditLogRepositorySQLAlchemy,
    OwnedContentRepositorySQLAlchemy,
)


class TestOwnedContentRepositorySQLAlchemy:
    async def test_deletes_only_the_owners_content(self, session):
        owner_id = uuid4()
        other_id = uuid4()
        session.add_all(
            [
                ItineraryModel(title="Intramuros walk", created_by=owner_id),
                ItineraryModel(title="Binondo food crawl", created_by=owner_id),
                ItineraryModel(title="Rizal Park", created_by=other_id),
                ReviewModel(user_id=owner_id, rating=5),
                ReviewModel(user_id=other_id, rating=4),
            ],
        )
        await session.flush()

        summary = await OwnedContentRepositorySQLAlchemy(session).delete_owned_by(owner_id)

        assert summary == DeletedContentSummary(itineraries=2, reviews=1)
        remaining = await session.execute(select(func.count()).select_from(ItineraryModel))
        assert remaining.scalar_one() == 1
        remaining_reviews = await session.execute(
            select(func.count()).select_from(ReviewModel),
        )
        assert remaining_reviews.scalar_one() == 1

    async def test_user_without_content(self, session):
        summary = await OwnedContentRepositorySQLAlchemy(session).delete_owned_by(uuid4())

        assert summary == DeletedContentSummary(itineraries=0, reviews=0)


class TestAuditLogRepositorySQLAlchemy:
    async def test_record_appends_entry(self, session):
        target_id = str(uuid4())

        await AuditLogRepositorySQLAlchemy(session).record(
            AuditEntry(
                admin_name="Boss One",
                action="Deactivated own account",
                role="admin",
                target_type="User",
                target_id=target_id,
                details="Deleted 0 itineraries and 0 reviews",
            ),
        )

        result = await session.execute(select(AuditLogModel))
        entry = result.scalar_one()
        assert entry.admin_name == "Boss One"
        assert entry.target_id == target_id
        assert entry.created_at is not None
