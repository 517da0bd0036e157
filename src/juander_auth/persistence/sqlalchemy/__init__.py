"""SQLAlchemy persistence for juander_auth.

Usage:
    from juander_auth.persistence.sqlalchemy import (
        AuthBase,
        UserCredentialModel,
        UserCredentialRepositorySQLAlchemy,
    )
"""

from juander_auth.persistence.sqlalchemy.base import AuthBase
from juander_auth.persistence.sqlalchemy.models import UserCredentialModel
from juander_auth.persistence.sqlalchemy.repositories import (
    UserCredentialRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
]
