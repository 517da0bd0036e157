"""Unit tests for EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest
from pydantic import SecretStr

from juander.domain.shared.exceptions import EmailDeliveryError
from juander.domain.user import OneTimeCodePurpose
from juander.infrastructure.email import EmailService
from juander_config.settings import Settings

SMTP_PATH = "juander.infrastructure.email.email_service.smtplib.SMTP"


def _settings(**overrides) -> Settings:
    values = {
        "jwt_secret_key": SecretStr("test-secret"),
        "postgres_password": SecretStr("test-password"),
        "smtp_enabled": True,
        "smtp_host": "smtp.juander.test",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": SecretStr("mail-password"),
        "smtp_from_email": "no-reply@juander.test",
        "smtp_starttls": True,
    }
    values.update(overrides)
    return Settings(**values)


def _sent_message(smtp_class: MagicMock):
    server = smtp_class.return_value.__enter__.return_value
    return server, server.send_message.call_args[0][0]


class TestSendOneTimeCode:
    def test_sends_code_over_starttls(self):
        service = EmailService(_settings())

        with patch(SMTP_PATH) as smtp_class:
            service.send_one_time_code(
                "ana@example.com",
                "482913",
                OneTimeCodePurpose.REGISTRATION,
            )

        smtp_class.assert_called_once_with("smtp.juander.test", 587, timeout=15.0)
        server, message = _sent_message(smtp_class)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "mail-password")
        assert message["To"] == "ana@example.com"
        assert message["Subject"] == "Verify your email"
        assert "482913" in message.get_payload()[0].get_payload()

    def test_password_reset_subject(self):
        service = EmailService(_settings())

        with patch(SMTP_PATH) as smtp_class:
            service.send_one_time_code(
                "ana@example.com",
                "482913",
                OneTimeCodePurpose.PASSWORD_RESET,
            )

        _, message = _sent_message(smtp_class)
        assert message["Subject"] == "OTP for Password Reset"

    def test_disabled_smtp_raises(self):
        service = EmailService(_settings(smtp_enabled=False))

        with patch(SMTP_PATH) as smtp_class:
            with pytest.raises(EmailDeliveryError) as exc_info:
                service.send_one_time_code(
                    "ana@example.com",
                    "482913",
                    OneTimeCodePurpose.REGISTRATION,
                )

        smtp_class.assert_not_called()
        assert exc_info.value.details == {"to": "ana@example.com"}

    def test_missing_host_raises(self):
        service = EmailService(_settings(smtp_host=""))

        with pytest.raises(EmailDeliveryError):
            service.send_one_time_code(
                "ana@example.com",
                "482913",
                OneTimeCodePurpose.REGISTRATION,
            )

    def test_smtp_failure_raises_delivery_error(self):
        service = EmailService(_settings())

        with patch(SMTP_PATH) as smtp_class:
            server = smtp_class.return_value.__enter__.return_value
            server.send_message.side_effect = smtplib.SMTPException("rejected")

            with pytest.raises(EmailDeliveryError) as exc_info:
                service.send_one_time_code(
                    "ana@example.com",
                    "482913",
                    OneTimeCodePurpose.EMAIL_CHANGE,
                )

        assert exc_info.value.details == {"to": "ana@example.com"}

    def test_connection_refused_raises_delivery_error(self):
        service = EmailService(_settings())

        with patch(SMTP_PATH, side_effect=ConnectionRefusedError):
            with pytest.raises(EmailDeliveryError):
                service.send_one_time_code(
                    "ana@example.com",
                    "482913",
                    OneTimeCodePurpose.REGISTRATION,
                )
