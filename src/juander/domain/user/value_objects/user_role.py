from enum import Enum


class UserRole(str, Enum):
    """Persisted account role."""

    GUEST = "guest"
    TOURIST = "tourist"
    ADMIN = "admin"
