"""Account router: profile attributes, account details and deactivation."""

import logging

from fastapi import APIRouter

from juander.presentation.api.dependencies import (
    AccountServiceDep,
    CurrentUser,
    DBSession,
    DeactivationServiceDep,
    committing,
)
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
from juander.presentation.api.schemas.auth import UserMessageResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put(
    "/account",
    summary="Update account details",
    responses={
        200: {"description": "Account updated"},
        400: {"description": "Email change needs a code, or weak password"},
        401: {"description": "Not authenticated"},
    },
)
async def update_account(
    request: UpdateAccountRequest,
    user: CurrentUser,
    account_service: AccountServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await account_service.update_account(
            user,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
        )

    return UserMessageResponse(
        message="Account updated successfully",
        user=UserResponse.from_user(user),
    )


@router.post("/birthday", summary="Set birthday")
async def set_birthday(
    request: BirthdayRequest,
    user: CurrentUser,
    account_service: AccountServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await account_service.update_birthday(
            user,
            month=request.month,
            day=request.day,
            year=request.year,
        )

    return UserMessageResponse(
        message="Birthday updated successfully",
        user=UserResponse.from_user(user),
    )


@router.post("/gender", summary="Set gender")
async def set_gender(
    request: GenderRequest,
    user: CurrentUser,
    account_service: AccountServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await account_service.update_gender(user, request.gender)

    return UserMessageResponse(
        message="Gender updated successfully",
        user=UserResponse.from_user(user),
    )


@router.post("/country", summary="Set country")
async def set_country(
    request: CountryRequest,
    user: CurrentUser,
    account_service: AccountServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await account_service.update_country(user, request.country)

    return UserMessageResponse(
        message="Country updated successfully",
        user=UserResponse.from_user(user),
    )


@router.post("/language", summary="Set preferred language")
async def set_language(
    request: LanguageRequest,
    user: CurrentUser,
    account_service: AccountServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await account_service.update_language(user, request.language)

    return UserMessageResponse(
        message="Language updated successfully",
        user=UserResponse.from_user(user),
    )


@router.post(
    "/complete-profile",
    summary="Mark the profile complete",
    responses={
        200: {"description": "Profile completed"},
        400: {"description": "Required fields missing (listed in missingFields)"},
    },
)
async def complete_profile(
    user: CurrentUser,
    account_service: AccountServiceDep,
    session: DBSession,
) -> UserMessageResponse:
    async with committing(session):
        user = await account_service.complete_profile(user)

    return UserMessageResponse(
        message="Profile completed successfully",
        user=UserResponse.from_user(user),
    )


@router.delete(
    "/deactivate-account",
    summary="Delete the account and its content",
    responses={
        200: {"description": "Account deleted"},
        400: {"description": "Confirmation text did not match"},
        401: {"description": "Not authenticated"},
    },
)
async def deactivate_account(
    request: DeactivateAccountRequest,
    user: CurrentUser,
    deactivation_service: DeactivationServiceDep,
    session: DBSession,
) -> DeactivateAccountResponse:
    """
    Permanently delete the account.

    The body must carry ``confirmationText`` set to exactly "DELETE".
    Itineraries and reviews owned by the user are deleted first.
    """
    async with committing(session):
        summary = await deactivation_service.deactivate(user, request.confirmation_text)

    return DeactivateAccountResponse(
        message="Account deactivated successfully",
        deleted_data=DeletedDataResponse(
            itineraries=summary.itineraries,
            reviews=summary.reviews,
        ),
    )
