from juander.domain.content.repositories.audit_log_repository import (
    AuditEntry,
    AuditLogRepository,
)
from juander.domain.content.repositories.owned_content_repository import (
    DeletedContentSummary,
    OwnedContentRepository,
)

__all__ = [
    "AuditEntry",
    "AuditLogRepository",
    "DeletedContentSummary",
    "OwnedContentRepository",
]
