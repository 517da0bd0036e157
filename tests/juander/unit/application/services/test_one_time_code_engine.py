"""Unit tests for OneTimeCodeEngine."""

from dataclasses import replace
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from juander.domain.shared.exceptions import EmailDeliveryError
from juander.domain.shared.time import utc_now
from juander.domain.user import OneTimeCodePurpose, User
from juander_auth.exceptions import InvalidCodeError

RESET = OneTimeCodePurpose.PASSWORD_RESET


class TestIssueAndDeliver:
    async def test_issue_hashes_code(self, code_engine):
        plaintext, code = await code_engine.issue(RESET)

        assert len(plaintext) == 6
        assert plaintext not in code.code_hash
        assert code.purpose == RESET
        assert code.failed_attempts == 0

    async def test_issue_sets_ten_minute_expiry(self, code_engine):
        before = utc_now()

        _, code = await code_engine.issue(RESET)

        assert before + timedelta(minutes=10) <= code.expires_at
        assert code.expires_at <= utc_now() + timedelta(minutes=10)

    async def test_issue_keeps_target_email(self, code_engine):
        _, code = await code_engine.issue(
            OneTimeCodePurpose.EMAIL_CHANGE,
            target_email="new@example.com",
        )

        assert code.target_email == "new@example.com"

    async def test_deliver_sends_plaintext(self, code_engine, email_service):
        await code_engine.deliver("a@example.com", "123456", RESET)

        email_service.send_one_time_code.assert_called_once_with(
            "a@example.com",
            "123456",
            RESET,
        )

    async def test_deliver_propagates_failure(self, code_engine, email_service):
        email_service.send_one_time_code.side_effect = EmailDeliveryError()

        with pytest.raises(EmailDeliveryError):
            await code_engine.deliver("a@example.com", "123456", RESET)


class TestRedeem:
    """Tests for redeem."""

    async def _user_with_code(self, code_engine, purpose=RESET):
        plaintext, code = await code_engine.issue(purpose)
        user = User("a@example.com")
        user.attach_one_time_code(code)
        return user, plaintext

    def setup_method(self):
        self.store = AsyncMock()
        self.store.claim_one_time_code.return_value = True

    async def test_correct_code_is_consumed(self, code_engine):
        user, plaintext = await self._user_with_code(code_engine)
        code_hash = user.one_time_code.code_hash

        consumed = await code_engine.redeem(user, plaintext, RESET, self.store)

        assert consumed.code_hash == code_hash
        assert user.one_time_code is None
        self.store.claim_one_time_code.assert_called_once_with(user.id, code_hash)

    async def test_wrong_code_counts_attempt_and_keeps_code(self, code_engine):
        user, plaintext = await self._user_with_code(code_engine)
        wrong = "000000" if plaintext != "000000" else "111111"

        with pytest.raises(InvalidCodeError):
            await code_engine.redeem(user, wrong, RESET, self.store)

        assert user.one_time_code is not None
        assert user.one_time_code.failed_attempts == 1
        self.store.record_failed_code_attempt.assert_called_once_with(user.id)
        self.store.claim_one_time_code.assert_not_called()

    async def test_missing_code_is_rejected(self, code_engine):
        with pytest.raises(InvalidCodeError):
            await code_engine.redeem(User("a@example.com"), "123456", RESET, self.store)

    async def test_code_for_other_purpose_is_rejected(self, code_engine):
        user, plaintext = await self._user_with_code(
            code_engine,
            OneTimeCodePurpose.EMAIL_CHANGE,
        )

        with pytest.raises(InvalidCodeError):
            await code_engine.redeem(user, plaintext, RESET, self.store)

        assert user.one_time_code is not None

    async def test_expired_code_is_rejected_even_if_correct(self, code_engine):
        user, plaintext = await self._user_with_code(code_engine)
        user.attach_one_time_code(
            replace(user.one_time_code, expires_at=utc_now() - timedelta(seconds=1)),
        )

        with pytest.raises(InvalidCodeError):
            await code_engine.redeem(user, plaintext, RESET, self.store)

        self.store.record_failed_code_attempt.assert_not_called()

    async def test_exhausted_code_is_rejected_even_if_correct(self, code_engine):
        user, plaintext = await self._user_with_code(code_engine)
        user.attach_one_time_code(replace(user.one_time_code, failed_attempts=5))

        with pytest.raises(InvalidCodeError):
            await code_engine.redeem(user, plaintext, RESET, self.store)

        self.store.claim_one_time_code.assert_not_called()

    async def test_fourth_wrong_attempt_still_allows_correct_code(self, code_engine):
        user, plaintext = await self._user_with_code(code_engine)
        user.attach_one_time_code(replace(user.one_time_code, failed_attempts=4))

        await code_engine.redeem(user, plaintext, RESET, self.store)

        assert user.one_time_code is None

    async def test_lost_claim_race_is_rejected(self, code_engine):
        """A concurrent redeemer cleared the code first."""
        user, plaintext = await self._user_with_code(code_engine)
        self.store.claim_one_time_code.return_value = False

        with pytest.raises(InvalidCodeError):
            await code_engine.redeem(user, plaintext, RESET, self.store)

        assert user.one_time_code is not None
