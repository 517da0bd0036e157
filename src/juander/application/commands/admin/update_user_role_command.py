import logging
from uuid import UUID

from juander.domain.user import (
    AccessPolicy,
    SuperAdminRoleLockedError,
    User,
    UserNotFoundError,
    UserRepository,
    UserRole,
)

logger = logging.getLogger(__name__)


class UpdateUserRoleCommand:
    """Command to update a user's role."""

    def __init__(self, user_repository: UserRepository, access_policy: AccessPolicy):
        self._user_repo = user_repository
        self._access_policy = access_policy

    async def execute(self, user_id: UUID, new_role: UserRole) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))

        if self._access_policy.is_super_admin(user) and new_role != UserRole.ADMIN:
            raise SuperAdminRoleLockedError

        if user.role != new_role:
            user.change_role(new_role)
            await self._user_repo.save(user)
            logger.info("Changed role of user %s to %s", user.id, new_role.value)

        return user
