"""Admin API schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from juander.domain.user import User, UserRole
from juander.presentation.api.schemas.common import CamelModel


class UserSummaryResponse(CamelModel):
    """User as listed in the admin dashboard."""

    id: UUID
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    auth_provider: str
    is_verified: bool
    is_super_admin: bool = False
    created_at: datetime

    @classmethod
    def from_user(cls, user: User, is_super_admin: bool = False) -> "UserSummaryResponse":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
            auth_provider=user.auth_provider.value,
            is_verified=user.is_verified,
            is_super_admin=is_super_admin,
            created_at=user.created_at,
        )


class UpdateRoleRequest(CamelModel):
    """Request to change a user's role."""

    role: UserRole
