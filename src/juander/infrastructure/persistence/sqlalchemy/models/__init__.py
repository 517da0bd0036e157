"""SQLAlchemy models.

Importing this package registers every table on ``Base.metadata``.
"""

from juander.infrastructure.persistence.sqlalchemy.models.audit_log_model import (
    AuditLogModel,
)
from juander.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from juander.infrastructure.persistence.sqlalchemy.models.content_models import (
    ItineraryModel,
    ReviewModel,
)
from juander.infrastructure.persistence.sqlalchemy.models.pending_registration_model import (
    PendingRegistrationModel,
)
from juander.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "AuditLogModel",
    "Base",
    "ItineraryModel",
    "PendingRegistrationModel",
    "ReviewModel",
    "TimestampMixin",
    "UserModel",
]
