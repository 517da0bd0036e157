from enum import Enum


class AuthProvider(str, Enum):
    """How an account proves its identity."""

    LOCAL = "local"
    GOOGLE = "google"
