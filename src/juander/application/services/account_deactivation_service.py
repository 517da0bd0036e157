"""Self-service account deactivation."""

import logging

from juander.domain.content import (
    AuditEntry,
    AuditLogRepository,
    DeletedContentSummary,
    OwnedContentRepository,
)
from juander.domain.user import (
    AccessPolicy,
    ConfirmationMismatchError,
    User,
    UserRepository,
)
from juander_auth.repositories import UserCredentialRepository

logger = logging.getLogger(__name__)

CONFIRMATION_PHRASE = "DELETE"


class AccountDeactivationService:
    """Delete an account together with the content it owns.

    Content goes first so that a failure part way never leaves itineraries
    or reviews without an owner. All deletes run in the caller's
    transaction.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        content_repository: OwnedContentRepository,
        audit_log_repository: AuditLogRepository,
        access_policy: AccessPolicy,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._content_repo = content_repository
        self._audit_log_repo = audit_log_repository
        self._access_policy = access_policy

    async def deactivate(self, user: User, confirmation_text: str) -> DeletedContentSummary:
        """
        Delete the user's itineraries, reviews, credentials and record.

        Parameters
        ----------
        user
            The signed-in user
        confirmation_text
            Must be exactly "DELETE"

        Returns
        -------
        Counts of deleted itineraries and reviews

        Raises
        ------
        ConfirmationMismatchError
            If the phrase does not match; nothing is deleted then
        """
        if confirmation_text != CONFIRMATION_PHRASE:
            raise ConfirmationMismatchError(CONFIRMATION_PHRASE)

        summary = await self._content_repo.delete_owned_by(user.id)

        if self._access_policy.has_admin_access(user):
            full_name = " ".join(filter(None, [user.first_name, user.last_name]))
            await self._audit_log_repo.record(
                AuditEntry(
                    admin_name=full_name or user.email,
                    action="Deactivated own account",
                    role=user.role.value,
                    target_type="User",
                    target_id=str(user.id),
                    details=(
                        f"Deleted {summary.itineraries} itineraries "
                        f"and {summary.reviews} reviews"
                    ),
                ),
            )

        await self._credential_repo.delete(user.id)
        await self._user_repo.delete(user.id)

        logger.info("Deactivated account %s", user.id)
        return summary
