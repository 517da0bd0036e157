"""Schemas for profile and account management."""

from typing import Optional

from pydantic import EmailStr, Field

from juander.presentation.api.schemas.common import CamelModel


class UpdateAccountRequest(CamelModel):
    """Omitted fields are left unchanged.

    ``email`` must equal the current address; changing it goes through
    ``/send-email-verification-otp`` and ``/verify-email-otp``.
    """

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class BirthdayRequest(CamelModel):
    month: str = Field(..., description="Month abbreviation, Jan to Dec")
    day: int = Field(..., alias="date", description="Day of the month")
    year: int


class GenderRequest(CamelModel):
    gender: str = Field(..., description="male, female or other")


class CountryRequest(CamelModel):
    country: str


class LanguageRequest(CamelModel):
    language: str = Field(..., description="en or tl")


class DeactivateAccountRequest(CamelModel):
    confirmation_text: str = Field(..., description='Must be exactly "DELETE"')


class DeletedDataResponse(CamelModel):
    itineraries: int
    reviews: int


class DeactivateAccountResponse(CamelModel):
    message: str
    deleted_data: DeletedDataResponse
