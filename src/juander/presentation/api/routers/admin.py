import logging
from uuid import UUID

from fastapi import APIRouter

from juander.application.commands import UpdateUserRoleCommand
from juander.application.queries import ListUsersQuery
from juander.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from juander.presentation.api.dependencies import (
    AccessPolicyDep,
    AdminUser,
    DBSession,
    SuperAdminUser,
    committing,
)
from juander.presentation.api.schemas.admin import (
    UpdateRoleRequest,
    UserSummaryResponse,
)
from juander.presentation.api.schemas.auth import UserMessageResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


@router.get(
    "/users",
    summary="List all users",
    responses={
        200: {"description": "List of all users"},
        403: {"description": "Admin access required"},
    },
)
async def list_users(
    _admin: AdminUser,  # Used for authorization check
    session: DBSession,
    access_policy: AccessPolicyDep,
) -> list[UserSummaryResponse]:
    """List all users."""
    users = await ListUsersQuery(UserRepositorySQLAlchemy(session)).execute()
    return [
        UserSummaryResponse.from_user(u, access_policy.is_super_admin(u))
        for u in users
    ]


@router.put(
    "/users/{user_id}/role",
    summary="Change a user's role",
    responses={
        200: {"description": "Role updated"},
        400: {"description": "Invalid role, or the super admin would be demoted"},
        403: {"description": "Super admin access required"},
        404: {"description": "User not found"},
    },
)
async def update_user_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    super_admin: SuperAdminUser,
    session: DBSession,
    access_policy: AccessPolicyDep,
) -> UserMessageResponse:
    """Update a user's role. The super admin can never be demoted."""
    command = UpdateUserRoleCommand(UserRepositorySQLAlchemy(session), access_policy)

    async with committing(session):
        user = await command.execute(user_id=user_id, new_role=request.role)

    logger.info(
        "Super admin %s set role of %s to %s",
        super_admin.id,
        user.id,
        request.role.value,
    )
    return UserMessageResponse(
        message="User role updated successfully",
        user=UserResponse.from_user(user),
    )
