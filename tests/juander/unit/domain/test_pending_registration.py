"""Unit tests for the PendingRegistration aggregate."""

from datetime import timedelta

import pytest

from juander.domain.registration import PendingRegistration
from juander.domain.shared.time import utc_now
from juander.domain.user import AuthProvider, OneTimeCode, OneTimeCodePurpose, UserRole


def _registration_code() -> OneTimeCode:
    return OneTimeCode(
        code_hash="$2b$04$hash",
        purpose=OneTimeCodePurpose.REGISTRATION,
        expires_at=utc_now() + timedelta(minutes=10),
    )


class TestPendingRegistration:
    def test_create_strips_names(self):
        code = _registration_code()

        draft = PendingRegistration.create(
            email="ana@example.com",
            first_name="  Ana ",
            last_name=" Cruz",
            password_hash="$argon2id$hash",
            one_time_code=code,
        )

        assert draft.first_name == "Ana"
        assert draft.last_name == "Cruz"
        assert draft.expires_at == code.expires_at

    def test_create_rejects_other_code_purposes(self):
        code = OneTimeCode(
            code_hash="x",
            purpose=OneTimeCodePurpose.PASSWORD_RESET,
            expires_at=utc_now() + timedelta(minutes=10),
        )

        with pytest.raises(ValueError, match="registration codes"):
            PendingRegistration.create(
                email="ana@example.com",
                first_name="Ana",
                last_name="Cruz",
                password_hash="hash",
                one_time_code=code,
            )

    def test_failed_attempts_accumulate(self):
        draft = PendingRegistration.create(
            "ana@example.com", "Ana", "Cruz", "hash", _registration_code()
        )

        draft.record_failed_code_attempt()

        assert draft.one_time_code.failed_attempts == 1

    def test_promote_creates_verified_local_account(self):
        draft = PendingRegistration.create(
            "ana@example.com", "Ana", "Cruz", "hash", _registration_code()
        )

        user = draft.promote()

        assert user.email == "ana@example.com"
        assert user.first_name == "Ana"
        assert user.last_name == "Cruz"
        assert user.is_verified is True
        assert user.auth_provider == AuthProvider.LOCAL
        assert user.role == UserRole.TOURIST
        assert user.id != draft.id

    def test_promote_with_admin_role(self):
        draft = PendingRegistration.create(
            "boss@example.com", "Boss", "One", "hash", _registration_code()
        )

        assert draft.promote(UserRole.ADMIN).role == UserRole.ADMIN
