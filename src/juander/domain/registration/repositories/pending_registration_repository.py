"""Pending registration repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from juander.domain.registration.aggregates import PendingRegistration


class PendingRegistrationRepository(ABC):
    """Repository interface for registration drafts."""

    @abstractmethod
    async def find_by_id(self, draft_id: UUID) -> Optional[PendingRegistration]:
        """Find a draft by id."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[PendingRegistration]:
        """
        Find the draft for an email, expired or not.

        Expired drafts are still returned until the purge removes them, so
        a late code is reported as invalid rather than as a missing draft.
        """

    @abstractmethod
    async def save(self, draft: PendingRegistration) -> None:
        """
        Create or update a draft.

        Raises
        ------
        RegistrationInProgressError
            If another draft for the same email exists (enforced by the store)
        """

    @abstractmethod
    async def delete(self, draft_id: UUID) -> bool:
        """Delete a draft. Returns True if one was deleted."""

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete every draft for an email. Returns the number deleted."""

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete drafts whose code expired before ``now``."""

    @abstractmethod
    async def claim_one_time_code(self, draft_id: UUID, code_hash: str) -> bool:
        """
        Atomically consume the draft if its code is still ``code_hash``.

        The draft is deleted as part of the claim, so at most one caller
        can ever promote it.
        """

    @abstractmethod
    async def record_failed_code_attempt(self, draft_id: UUID) -> None:
        """Increment the failed-attempt counter of the draft's code."""
