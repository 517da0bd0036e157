"""Unit tests for PasswordResetService."""

from unittest.mock import AsyncMock, Mock

import pytest

from juander.application.services import PasswordResetService
from juander.domain.user import (
    OneTimeCodePurpose,
    PasswordNotSupportedError,
    User,
    UserNotFoundError,
)
from juander_auth import InvalidCodeError, PasswordHashingService, WeakPasswordError

TEST_EMAIL = "ana@example.com"
TEST_NEW_PASSWORD = "new_secure_password_123"


class TestPasswordResetService:
    @pytest.fixture(autouse=True)
    def _setup(self, code_engine, email_service, sent_codes):
        self.user_repo = AsyncMock()
        self.user_repo.claim_one_time_code.return_value = True
        self.credential_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = "new-hash"
        self.email_service = email_service
        self.sent_codes = sent_codes

        self.user = User.create_local(TEST_EMAIL, "Ana", "Cruz")
        self.user_repo.find_by_email.return_value = self.user

        self.service = PasswordResetService(
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
            password_service=self.password_service,
            code_engine=code_engine,
        )

    async def test_request_reset_attaches_and_sends_code(self):
        await self.service.request_reset(TEST_EMAIL)

        assert self.user.one_time_code.purpose == OneTimeCodePurpose.PASSWORD_RESET
        self.user_repo.save.assert_called_once_with(self.user)
        assert self.sent_codes.last_recipient == TEST_EMAIL

    async def test_request_reset_unknown_email(self):
        self.user_repo.find_by_email.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.service.request_reset("nobody@example.com")

        self.email_service.send_one_time_code.assert_not_called()

    async def test_request_reset_for_google_account(self):
        self.user_repo.find_by_email.return_value = User.create_federated(
            TEST_EMAIL,
            google_id="sub-1",
            first_name="Ana",
            last_name=None,
        )

        with pytest.raises(PasswordNotSupportedError):
            await self.service.request_reset(TEST_EMAIL)

    async def test_new_request_replaces_previous_code(self):
        await self.service.request_reset(TEST_EMAIL)
        first_hash = self.user.one_time_code.code_hash

        await self.service.request_reset(TEST_EMAIL)

        assert self.user.one_time_code.code_hash != first_hash

    async def test_reset_password_replaces_hash_and_unlocks(self):
        await self.service.request_reset(TEST_EMAIL)

        await self.service.reset_password(TEST_EMAIL, self.sent_codes.last, TEST_NEW_PASSWORD)

        self.credential_repo.save.assert_called_once_with(self.user.id, "new-hash")
        self.credential_repo.reset_failed_attempts.assert_called_once_with(self.user.id)
        assert self.user.one_time_code is None

    async def test_reset_password_wrong_code(self):
        await self.service.request_reset(TEST_EMAIL)
        wrong = "000000" if self.sent_codes.last != "000000" else "111111"

        with pytest.raises(InvalidCodeError):
            await self.service.reset_password(TEST_EMAIL, wrong, TEST_NEW_PASSWORD)

        self.credential_repo.save.assert_not_called()
        assert self.user.one_time_code is not None

    async def test_reset_password_without_request(self):
        with pytest.raises(InvalidCodeError):
            await self.service.reset_password(TEST_EMAIL, "123456", TEST_NEW_PASSWORD)

    async def test_weak_new_password_leaves_code_untouched(self):
        await self.service.request_reset(TEST_EMAIL)
        self.password_service.validate_strength.side_effect = WeakPasswordError

        with pytest.raises(WeakPasswordError):
            await self.service.reset_password(TEST_EMAIL, self.sent_codes.last, "short")

        assert self.user.one_time_code is not None
        self.user_repo.claim_one_time_code.assert_not_called()
