"""Query to list every account for the admin dashboard."""

from juander.domain.user import User, UserRepository


class ListUsersQuery:
    """List all users, oldest first."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self) -> list[User]:
        return await self._user_repo.list_all()
