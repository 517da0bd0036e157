"""SQLAlchemy implementation of AuditLogRepository."""

from sqlalchemy.ext.asyncio import AsyncSession

from juander.domain.content import AuditEntry, AuditLogRepository
from juander.infrastructure.persistence.sqlalchemy.models import AuditLogModel


class AuditLogRepositorySQLAlchemy(AuditLogRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self, entry: AuditEntry) -> None:
        self._session.add(
            AuditLogModel(
                admin_name=entry.admin_name,
                action=entry.action,
                role=entry.role,
                target_type=entry.target_type,
                target_id=entry.target_id,
                details=entry.details,
            ),
        )
        await self._session.flush()
