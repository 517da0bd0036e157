"""Authentication router: registration, login and one-time code flows."""

import logging

from fastapi import APIRouter, status

from juander.presentation.api.dependencies import (
    AuthService,
    CurrentUser,
    DBSession,
    EmailChangeServiceDep,
    GoogleVerifierDep,
    PasswordResetServiceDep,
    RegistrationServiceDep,
    committing,
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
from juander.presentation.api.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Start a registration",
    responses={
        201: {"description": "Draft stored and verification code sent"},
        400: {"description": "Invalid input (weak password)"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    registration_service: RegistrationServiceDep,
    session: DBSession,
) -> RegisterResponse:
    """
    Store a registration draft and email a 6-digit code.

    Registering again for the same email replaces the draft and sends a
    new code. No account exists until the code is verified.
    """
    async with committing(session):
        draft = await registration_service.register(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
        )

    return RegisterResponse(
        message="Verification code sent to your email",
        pending_id=draft.id,
    )


@router.post(
    "/verify-otp",
    summary="Confirm a registration",
    responses={
        200: {"description": "Account created"},
        400: {"description": "Invalid or expired code"},
        404: {"description": "No pending registration for the email"},
    },
)
async def verify_otp(
    request: VerifyOtpRequest,
    registration_service: RegistrationServiceDep,
    session: DBSession,
) -> VerifyOtpResponse:
    async with committing(session):
        user = await registration_service.verify(email=request.email, code=request.otp)

    return VerifyOtpResponse(message="Registration complete", user_id=user.id)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Authenticate with email and password.

    Password login locks for a while after repeated failures; a locked
    account gets the same 401 as a wrong password.
    """
    async with committing(session):
        user, token = await auth_service.login(
            email=request.email,
            password=request.password,
        )

    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.from_user(user),
    )


@router.post(
    "/google-login",
    summary="Sign in with Google",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Google token could not be verified"},
    },
)
async def google_login(
    request: GoogleLoginRequest,
    verifier: GoogleVerifierDep,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """Verify a Google ID token, then create or link the account."""
    identity = await verifier.verify(request.token)

    async with committing(session):
        user, token = await auth_service.login_with_google(identity)

    return AuthResponse(
        message="Google login successful",
        token=token,
        user=UserResponse.from_user(user),
    )


@router.post(
    "/send-otp",
    summary="Request a password reset code",
    responses={
        200: {"description": "Reset code sent"},
        400: {"description": "Account signs in with Google"},
        404: {"description": "No account for the email"},
    },
)
async def send_otp(
    request: SendOtpRequest,
    password_reset_service: PasswordResetServiceDep,
    session: DBSession,
) -> MessageResponse:
    async with committing(session):
        await password_reset_service.request_reset(request.email)

    return MessageResponse(message="OTP sent to your email")


@router.post(
    "/reset-password",
    summary="Reset password with a code",
    responses={
        200: {"description": "Password reset successfully"},
        400: {"description": "Invalid or expired code, or weak password"},
        404: {"description": "No account for the email"},
    },
)
async def reset_password(
    request: ResetPasswordRequest,
    password_reset_service: PasswordResetServiceDep,
    session: DBSession,
) -> MessageResponse:
    async with committing(session):
        await password_reset_service.reset_password(
            email=request.email,
            code=request.otp,
            new_password=request.new_password,
        )

    return MessageResponse(message="Password reset successful")


@router.post(
    "/send-email-verification-otp",
    summary="Send a code to verify an email address",
    responses={
        200: {"description": "Code sent"},
        400: {"description": "Email already in use"},
        401: {"description": "Not authenticated"},
    },
)
async def send_email_verification_otp(
    request: SendEmailVerificationRequest,
    user: CurrentUser,
    email_change_service: EmailChangeServiceDep,
    session: DBSession,
) -> MessageResponse:
    async with committing(session):
        await email_change_service.request_change(user, request.email)

    return MessageResponse(message="Verification code sent to your email")


@router.post(
    "/verify-email-otp",
    summary="Confirm an email address",
    responses={
        200: {"description": "Email verified (and changed, if requested)"},
        400: {"description": "Invalid or expired code"},
        401: {"description": "Not authenticated"},
    },
)
async def verify_email_otp(
    request: VerifyEmailOtpRequest,
    user: CurrentUser,
    email_change_service: EmailChangeServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await email_change_service.confirm_change(
            user,
            code=request.otp,
            new_email=request.new_email,
        )

    return UserMessageResponse(
        message="Email verified successfully",
        user=UserResponse.from_user(user),
    )


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "Current user data"},
        401: {"description": "Not authenticated"},
        404: {"description": "User no longer exists"},
    },
)
async def get_me(user: CurrentUser) -> UserResponse:
    """
    Get the current authenticated user's information.

    Requires a valid access token in the Authorization header.
    """
    return UserResponse.from_user(user)
