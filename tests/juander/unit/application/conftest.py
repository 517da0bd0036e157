"""Shared fixtures for application layer unit tests."""

from unittest.mock import Mock

import pytest

from juander.application.services import OneTimeCodeEngine
from juander.infrastructure.email import EmailService
from juander_auth.services import OneTimeCodeService


class SentCodes:
    """Capture codes handed to the mock email service."""

    def __init__(self, email_service: Mock):
        self._email_service = email_service

    @property
    def last(self) -> str:
        return self._email_service.send_one_time_code.call_args[0][1]

    @property
    def last_recipient(self) -> str:
        return self._email_service.send_one_time_code.call_args[0][0]


@pytest.fixture
def email_service() -> Mock:
    return Mock(spec=EmailService)


@pytest.fixture
def code_engine(email_service) -> OneTimeCodeEngine:
    """A real code engine with cheap hashing and a mocked mailer."""
    return OneTimeCodeEngine(
        code_service=OneTimeCodeService(rounds=4),
        email_service=email_service,
        expire_minutes=10,
        max_attempts=5,
    )


@pytest.fixture
def sent_codes(email_service) -> SentCodes:
    return SentCodes(email_service)
