from juander.infrastructure.persistence.sqlalchemy.repositories.audit_log_repository import (
    AuditLogRepositorySQLAlchemy,
)
from juander.infrastructure.persistence.sqlalchemy.repositories.owned_content_repository import (
    OwnedContentRepositorySQLAlchemy,
)
from juander.infrastructure.persistence.sqlalchemy.repositories.pending_registration_repository import (
    PendingRegistrationRepositorySQLAlchemy,
)
from juander.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AuditLogRepositorySQLAlchemy",
    "OwnedContentRepositorySQLAlchemy",
    "PendingRegistrationRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
