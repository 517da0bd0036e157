"""Port to the administrative audit log."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AuditEntry:
    admin_name: str
    action: str
    role: str
    target_type: str
    target_id: str
    details: str = ""


class AuditLogRepository(ABC):
    @abstractmethod
    async def record(self, entry: AuditEntry) -> None:
        """Append an entry to the audit log."""
