import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from juander.domain.shared.exceptions import EmailDeliveryError
from juander.domain.user import OneTimeCodePurpose
from juander_config.settings import Settings

logger = logging.getLogger(__name__)

ONE_TIME_CODE_SUBJECTS = {
    OneTimeCodePurpose.REGISTRATION: "Verify your email",
    OneTimeCodePurpose.PASSWORD_RESET: "OTP for Password Reset",
    OneTimeCodePurpose.EMAIL_CHANGE: "Verify your new email",
}

ONE_TIME_CODE_INTROS = {
    OneTimeCodePurpose.REGISTRATION: "Thanks for signing up to Juander.",
    OneTimeCodePurpose.PASSWORD_RESET: "You requested a password reset for your Juander account.",
    OneTimeCodePurpose.EMAIL_CHANGE: "You asked to use this address for your Juander account.",
}

ONE_TIME_CODE_TEXT = """Hello,

{intro}

Your verification code is: {code}

It expires in {expire_minutes} minutes. If you didn't request this, you can
safely ignore this email.

-- Juander
"""

ONE_TIME_CODE_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .code {{ font-size: 32px; letter-spacing: 8px; font-weight: bold; color: #0f766e; }}
        .footer {{ margin-top: 30px; color: #6b7280; font-size: 14px; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>{subject}</h2>
        <p>{intro}</p>
        <p>Your verification code is:</p>
        <p class="code">{code}</p>
        <p>This code expires in {expire_minutes} minutes.</p>
        <div class="footer">
            <p>If you didn't request this, you can safely ignore this email.</p>
            <p>-- Juander</p>
        </div>
    </div>
</body>
</html>
"""


class EmailService:
    """Outbound transactional mail over SMTP.

    Sending is blocking; async callers run it in a worker thread.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            logger.error("SMTP host not configured")
            raise EmailDeliveryError("Email delivery is not configured")

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )
        timeout = self._settings.smtp_timeout

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                    timeout=timeout,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    timeout=timeout,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise EmailDeliveryError(details={"to": to_email}) from e

    def send_one_time_code(
        self,
        to_email: str,
        code: str,
        purpose: OneTimeCodePurpose,
    ) -> None:
        """Send a one-time code.

        Raises
        ------
        EmailDeliveryError
            If SMTP is disabled, or the mail server rejected or could not
            be reached
        """
        if not self._settings.smtp_enabled:
            logger.error(
                "SMTP disabled, cannot send %s code email to %s",
                purpose.value,
                to_email,
            )
            raise EmailDeliveryError(details={"to": to_email})

        subject = ONE_TIME_CODE_SUBJECTS[purpose]
        intro = ONE_TIME_CODE_INTROS[purpose]
        expire_minutes = self._settings.otp_expire_minutes

        message = self._create_message(
            to_email=to_email,
            subject=subject,
            text_body=ONE_TIME_CODE_TEXT.format(
                intro=intro,
                code=code,
                expire_minutes=expire_minutes,
            ),
            html_body=ONE_TIME_CODE_HTML.format(
                subject=subject,
                intro=intro,
                code=code,
                expire_minutes=expire_minutes,
            ),
        )

        self._send_email(to_email, message)
