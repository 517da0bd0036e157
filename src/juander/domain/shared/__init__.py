"""Shared domain building blocks (exceptions, time helpers)."""

from juander.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EmailDeliveryError,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)
from juander.domain.shared.time import ensure_tz_aware, today_utc, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EmailDeliveryError",
    "EntityNotFoundError",
    "ErrorCode",
    "ExternalServiceError",
    "ValidationError",
    "ensure_tz_aware",
    "today_utc",
    "utc_now",
]
