"""Data classes exchanged by the auth services."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token.

    ``role``, ``first_name`` and ``last_name`` are snapshots taken at
    issuance. Authorization must re-read them from the user store.
    """

    user_id: UUID
    exp: datetime
    role: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class FederatedIdentity:
    """Identity asserted by a verified third-party token."""

    subject: str
    email: str
    name: str | None = None
    picture: str | None = None
