"""SQLAlchemy declarative base for juander_auth models.

This provides a separate Base for auth models. The consuming application
creates both ``Base.metadata`` and ``AuthBase.metadata`` at startup.
"""

from sqlalchemy.orm import DeclarativeBase


class AuthBase(DeclarativeBase):
    """Declarative base for juander_auth models."""
