"""Unit tests for AccountDeactivationService."""

from unittest.mock import AsyncMock

import pytest

from juander.application.services import AccountDeactivationService
from juander.domain.content import DeletedContentSummary
from juander.domain.user import AccessPolicy, ConfirmationMismatchError, User, UserRole

SUPER_ADMIN_EMAIL = "root@juander.test"


class TestAccountDeactivationService:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.credential_repo = AsyncMock()
        self.content_repo = AsyncMock()
        self.content_repo.delete_owned_by.return_value = DeletedContentSummary(
            itineraries=2,
            reviews=3,
        )
        self.audit_log_repo = AsyncMock()

        self.service = AccountDeactivationService(
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
            content_repository=self.content_repo,
            audit_log_repository=self.audit_log_repo,
            access_policy=AccessPolicy(SUPER_ADMIN_EMAIL),
        )

    async def test_deactivate_deletes_content_and_account(self):
        user = User.create_local("ana@example.com", "Ana", "Cruz")

        summary = await self.service.deactivate(user, "DELETE")

        assert summary == DeletedContentSummary(itineraries=2, reviews=3)
        self.content_repo.delete_owned_by.assert_called_once_with(user.id)
        self.credential_repo.delete.assert_called_once_with(user.id)
        self.user_repo.delete.assert_called_once_with(user.id)
        self.audit_log_repo.record.assert_not_called()

    @pytest.mark.parametrize("confirmation", ["delete", "DELETE ", "", "REMOVE"])
    async def test_wrong_confirmation_deletes_nothing(self, confirmation):
        user = User.create_local("ana@example.com", "Ana", "Cruz")

        with pytest.raises(ConfirmationMismatchError, match="type DELETE"):
            await self.service.deactivate(user, confirmation)

        self.content_repo.delete_owned_by.assert_not_called()
        self.user_repo.delete.assert_not_called()

    async def test_admin_deactivation_is_audited(self):
        admin = User.create_local("boss@example.com", "Boss", "One", role=UserRole.ADMIN)

        await self.service.deactivate(admin, "DELETE")

        entry = self.audit_log_repo.record.call_args[0][0]
        assert entry.admin_name == "Boss One"
        assert entry.action == "Deactivated own account"
        assert entry.role == "admin"
        assert entry.target_type == "User"
        assert entry.target_id == str(admin.id)
        assert entry.details == "Deleted 2 itineraries and 3 reviews"

    async def test_super_admin_without_name_is_audited_by_email(self):
        root = User(SUPER_ADMIN_EMAIL, role=UserRole.TOURIST)

        await self.service.deactivate(root, "DELETE")

        entry = self.audit_log_repo.record.call_args[0][0]
        assert entry.admin_name == SUPER_ADMIN_EMAIL
