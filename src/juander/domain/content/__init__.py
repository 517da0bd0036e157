"""Owned content and audit log ports used by account deactivation."""

from juander.domain.content.repositories import (
    AuditEntry,
    AuditLogRepository,
    DeletedContentSummary,
    OwnedContentRepository,
)

__all__ = [
    "AuditEntry",
    "AuditLogRepository",
    "DeletedContentSummary",
    "OwnedContentRepository",
]
