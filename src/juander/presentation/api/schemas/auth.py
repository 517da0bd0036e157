"""Authentication schemas for request/response models."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field

from juander.domain.user import User
from juander.domain.user.value_objects import normalize_language
from juander.presentation.api.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request schema for starting a registration."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="Password (8-128 characters)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Juan",
                "lastName": "Dela Cruz",
                "email": "juan@example.com",
                "password": "securepassword123",
            },
        },
    )


class RegisterResponse(CamelModel):
    message: str
    pending_id: UUID


class VerifyOtpRequest(CamelModel):
    """Request schema for confirming a registration."""

    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=16)


class VerifyOtpResponse(CamelModel):
    message: str
    user_id: UUID


class LoginRequest(CamelModel):
    """Request schema for user login."""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "juan@example.com",
                "password": "securepassword123",
            },
        },
    )


class GoogleLoginRequest(CamelModel):
    """Request schema for Google sign-in with an ID token from the client."""

    token: str = Field(..., min_length=1)


class SendOtpRequest(CamelModel):
    """Request schema for requesting a password reset code."""

    email: EmailStr


class ResetPasswordRequest(CamelModel):
    """Request schema for resetting a password with a code."""

    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=16)
    new_password: str


class SendEmailVerificationRequest(CamelModel):
    """Request schema for sending a code to a (new) email address."""

    email: EmailStr


class VerifyEmailOtpRequest(CamelModel):
    """Request schema for confirming an email address.

    ``new_email`` switches the account to that address; it must be the
    address the code was sent to.
    """

    otp: str = Field(..., min_length=1, max_length=16)
    new_email: Optional[EmailStr] = None


class UserResponse(CamelModel):
    """Response schema for user data. Never carries secrets."""

    id: UUID
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_verified: bool
    auth_provider: str
    birthday: Optional[date] = None
    gender: Optional[str] = None
    country: Optional[str] = None
    language: str
    profile_picture: Optional[str] = None
    profile_completed: bool
    has_completed_tour: bool
    tour_completed_at: Optional[datetime] = None
    hide_fort_santiago_modal: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
            is_verified=user.is_verified,
            auth_provider=user.auth_provider.value,
            birthday=user.birthday,
            gender=user.gender.value if user.gender else None,
            country=user.country,
            language=normalize_language(user.language),
            profile_picture=user.profile_picture,
            profile_completed=user.profile_completed,
            has_completed_tour=user.has_completed_tour,
            tour_completed_at=user.tour_completed_at,
            hide_fort_santiago_modal=user.hide_fort_santiago_modal,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(CamelModel):
    """Response schema for a successful login."""

    message: str
    token: str
    user: UserResponse


class UserMessageResponse(CamelModel):
    """Response carrying a message and the updated user."""

    message: str
    user: UserResponse
