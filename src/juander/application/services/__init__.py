"""Application layer services."""

from juander.application.services.account_deactivation_service import (
    CONFIRMATION_PHRASE,
    AccountDeactivationService,
)
from juander.application.services.account_service import AccountService
from juander.application.services.authentication_service import (
    AuthenticationService,
    split_display_name,
)
from juander.application.services.email_change_service import EmailChangeService
from juander.application.services.one_time_code_engine import OneTimeCodeEngine
from juander.application.services.password_reset_service import PasswordResetService
from juander.application.services.registration_service import RegistrationService

__all__ = [
    "CONFIRMATION_PHRASE",
    "AccountDeactivationService",
    "AccountService",
    "AuthenticationService",
    "EmailChangeService",
    "OneTimeCodeEngine",
    "PasswordResetService",
    "RegistrationService",
    "split_display_name",
]
