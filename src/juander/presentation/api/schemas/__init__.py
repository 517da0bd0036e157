"""Pydantic schemas for API request/response models."""

from juander.presentation.api.schemas.account import (
    BirthdayRequest,
    CountryRequest,
    DeactivateAccountRequest,
    DeactivateAccountResponse,
    DeletedDataResponse,
    GenderRequest,
    LanguageRequest,
    UpdateAccountRequest,
)
from juander.presentation.api.schemas.admin import (
    UpdateRoleRequest,
    UserSummaryResponse,
)
from juander.presentation.api.schemas.auth import (
    AuthResponse,
    GoogleLoginRequest,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SendEmailVerificationRequest,
    SendOtpRequest,
    UserMessageResponse,
    UserResponse,
    VerifyEmailOtpRequest,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from juander.presentation.api.schemas.common import (
    CamelModel,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "AuthResponse",
    "BirthdayRequest",
    "CamelModel",
    "CountryRequest",
    "DeactivateAccountRequest",
    "DeactivateAccountResponse",
    "DeletedDataResponse",
    "ErrorResponse",
    "GenderRequest",
    "GoogleLoginRequest",
    "HealthResponse",
    "LanguageRequest",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ResetPasswordRequest",
    "SendEmailVerificationRequest",
    "SendOtpRequest",
    "UpdateAccountRequest",
    "UpdateRoleRequest",
    "UserMessageResponse",
    "UserResponse",
    "UserSummaryResponse",
    "VerifyEmailOtpRequest",
    "VerifyOtpRequest",
    "VerifyOtpResponse",
]
