"""Password credential store for local Juander accounts.

A row holds the argon2 hash of a local account's password together with
its failed-login counter and lock deadline. Google accounts never get a row.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserCredentialData:
    """Snapshot of one credential row. ``password_hash`` is an argon2 string."""

    user_id: str
    password_hash: str
    failed_login_attempts: int
    locked_until: datetime | None
    last_login_at: datetime | None


class UserCredentialRepository(ABC):
    """
    Credentials of local (email and password) accounts.

    Registration creates the row and deactivation deletes it. A password
    change overwrites the hash; a password reset also clears the lock.
    A missing row means the account signs in with Google.

    The lock threshold and duration below are fallbacks; the running service
    passes LOGIN_MAX_FAILED_ATTEMPTS and LOGIN_LOCKOUT_MINUTES from settings.
    """

    MAX_FAILED_ATTEMPTS: int = 5
    LOCKOUT_DURATION_MINUTES: int = 15

    @abstractmethod
    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        """
        Create or update credentials for a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        password_hash
            The argon2 password hash

        Returns
        -------
        The saved credential data
        """

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        """
        Find credentials by user ID.

        Returns
        -------
        Credential data if found, None otherwise
        """

    @abstractmethod
    async def increment_failed_attempts(self, user_id: UUID) -> int:
        """
        Increment failed login attempts for a user.

        Locks the account for LOCKOUT_DURATION_MINUTES once the count reaches
        MAX_FAILED_ATTEMPTS.

        Returns
        -------
        The new count of failed attempts
        """

    @abstractmethod
    async def reset_failed_attempts(self, user_id: UUID) -> None:
        """
        Reset failed login attempts and clear any account lockout.
        """

    @abstractmethod
    async def update_last_login(self, user_id: UUID) -> None:
        """
        Update last login timestamp.
        """

    @abstractmethod
    async def is_account_locked(self, user_id: UUID) -> tuple[bool, datetime | None]:
        """
        Check if an account is locked.

        Returns
        -------
        Tuple of (is_locked, locked_until) where locked_until is None
        if not locked
        """

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """
        Delete credentials for a user.

        Returns
        -------
        True if deleted, False if not found
        """
