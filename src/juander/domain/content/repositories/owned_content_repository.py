"""Port to the content a user owns (itineraries, reviews)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class DeletedContentSummary:
    itineraries: int = 0
    reviews: int = 0


class OwnedContentRepository(ABC):
    """Content whose lifetime is bound to its owner's account."""

    @abstractmethod
    async def delete_owned_by(self, user_id: UUID) -> DeletedContentSummary:
        """
        Delete every itinerary and review owned by the user.

        Returns
        -------
        How many of each were removed
        """
