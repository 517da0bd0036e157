"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from juander.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Find a user by their ID.

        Returns
        -------
        User if found, None otherwise
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by their exact email address.

        Returns
        -------
        User if found, None otherwise
        """

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        """Return all users, oldest first."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """
        Create or update a user.

        Raises
        ------
        EmailAlreadyExistsError
            If another user already holds the email (enforced by the store)
        """

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """
        Delete a user.

        Returns
        -------
        True if deleted, False if not found
        """

    @abstractmethod
    async def claim_one_time_code(self, user_id: UUID, code_hash: str) -> bool:
        """
        Atomically clear the user's one-time code if it is still ``code_hash``.

        Exactly one of several concurrent callers presenting the same code
        gets True; the others observe the cleared code and get False.
        """

    @abstractmethod
    async def record_failed_code_attempt(self, user_id: UUID) -> None:
        """Increment the failed-attempt counter of the user's current code."""
