from datetime import date, datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from juander.domain.shared.time import utc_now
from juander.domain.user.exceptions import ProfileIncompleteError
from juander.domain.user.value_objects import (
    DEFAULT_LANGUAGE,
    AuthProvider,
    Email,
    Gender,
    OneTimeCode,
    UserRole,
)

REQUIRED_PROFILE_FIELDS = ("first_name", "last_name", "birthday", "gender", "country")


class User:
    """
    User aggregate root (the durable identity record).

    Each user is uniquely identified by a random UUID generated at creation
    time. Password hashes live in the credential store, so an account has
    one exactly when ``auth_provider`` is ``local``.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        role: Union[str, UserRole] = UserRole.TOURIST,
        auth_provider: Union[str, AuthProvider] = AuthProvider.LOCAL,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        is_verified: bool = False,
        one_time_code: Optional[OneTimeCode] = None,
        birthday: Optional[date] = None,
        gender: Union[str, Gender, None] = None,
        country: Optional[str] = None,
        language: str = DEFAULT_LANGUAGE,
        profile_picture: Optional[str] = None,
        google_id: Optional[str] = None,
        profile_completed: bool = False,
        has_completed_tour: bool = False,
        tour_completed_at: Optional[datetime] = None,
        hide_fort_santiago_modal: bool = False,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id if id is not None else uuid4()
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._auth_provider = (
            auth_provider
            if isinstance(auth_provider, AuthProvider)
            else AuthProvider(auth_provider)
        )
        self._first_name = first_name
        self._last_name = last_name
        self._is_verified = is_verified
        self._one_time_code = one_time_code
        self._birthday = birthday
        self._gender = Gender(gender) if isinstance(gender, str) else gender
        self._country = country
        self._language = language
        self._profile_picture = profile_picture
        self._google_id = google_id
        self._profile_completed = profile_completed
        self._has_completed_tour = has_completed_tour
        self._tour_completed_at = tour_completed_at
        self._hide_fort_santiago_modal = hide_fort_santiago_modal
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def auth_provider(self) -> AuthProvider:
        return self._auth_provider

    @property
    def is_federated(self) -> bool:
        return self._auth_provider != AuthProvider.LOCAL

    @property
    def first_name(self) -> Optional[str]:
        return self._first_name

    @property
    def last_name(self) -> Optional[str]:
        return self._last_name

    @property
    def is_verified(self) -> bool:
        return self._is_verified

    @property
    def one_time_code(self) -> Optional[OneTimeCode]:
        return self._one_time_code

    @property
    def birthday(self) -> Optional[date]:
        return self._birthday

    @property
    def gender(self) -> Optional[Gender]:
        return self._gender

    @property
    def country(self) -> Optional[str]:
        return self._country

    @property
    def language(self) -> str:
        return self._language

    @property
    def profile_picture(self) -> Optional[str]:
        return self._profile_picture

    @property
    def google_id(self) -> Optional[str]:
        return self._google_id

    @property
    def profile_completed(self) -> bool:
        return self._profile_completed

    @property
    def has_completed_tour(self) -> bool:
        return self._has_completed_tour

    @property
    def tour_completed_at(self) -> Optional[datetime]:
        return self._tour_completed_at

    @property
    def hide_fort_santiago_modal(self) -> bool:
        return self._hide_fort_santiago_modal

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def _touch(self) -> None:
        self._updated_at = utc_now()

    # One-time codes

    def attach_one_time_code(self, code: OneTimeCode) -> None:
        # Replaces any code issued for another purpose
        self._one_time_code = code
        self._touch()

    def clear_one_time_code(self) -> None:
        self._one_time_code = None
        self._touch()

    def record_failed_code_attempt(self) -> None:
        if self._one_time_code is not None:
            self._one_time_code = self._one_time_code.with_failed_attempt()
            self._touch()

    # Identity

    def mark_verified(self) -> None:
        self._is_verified = True
        self._touch()

    def change_email(self, email: Union[str, Email]) -> None:
        self._email = email if isinstance(email, Email) else Email(email)
        self._touch()

    def change_role(self, role: UserRole) -> None:
        self._role = role
        self._touch()

    def link_google_account(self, google_id: str) -> None:
        if self._google_id is None:
            self._google_id = google_id
            self._touch()

    def sync_profile_picture(self, picture: Optional[str]) -> None:
        if picture and picture != self._profile_picture:
            self._profile_picture = picture
            self._touch()

    # Profile

    def update_name(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> None:
        # Only provided (non-None) values are updated; others are preserved.
        if first_name is not None:
            self._first_name = first_name.strip()
        if last_name is not None:
            self._last_name = last_name.strip()
        self._touch()

    def set_birthday(self, birthday: date) -> None:
        self._birthday = birthday
        self._touch()

    def set_gender(self, gender: Gender) -> None:
        self._gender = gender
        self._touch()

    def set_country(self, country: str) -> None:
        self._country = country
        self._touch()

    def set_language(self, language: str) -> None:
        self._language = language
        self._touch()

    def missing_profile_fields(self) -> list[str]:
        return [name for name in REQUIRED_PROFILE_FIELDS if not getattr(self, name)]

    def complete_profile(self) -> None:
        """Mark the profile complete once every required field is present.

        Calling it again on a completed profile changes nothing.

        Raises
        ------
        ProfileIncompleteError
            If any of first name, last name, birthday, gender or country
            is missing
        """
        missing = self.missing_profile_fields()
        if missing:
            raise ProfileIncompleteError(missing)
        if not self._profile_completed:
            self._profile_completed = True
            self._touch()

    @classmethod
    def create_local(
        cls,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.TOURIST,
    ) -> "User":
        """Create a verified password account (promotion of a confirmed draft)."""
        return cls(
            email=email,
            role=role,
            auth_provider=AuthProvider.LOCAL,
            first_name=first_name,
            last_name=last_name,
            is_verified=True,
        )

    @classmethod
    def create_federated(  # NOQA: PLR0913
        cls,
        email: Union[str, Email],
        google_id: str,
        first_name: Optional[str],
        last_name: Optional[str],
        profile_picture: Optional[str] = None,
        role: UserRole = UserRole.TOURIST,
    ) -> "User":
        return cls(
            email=email,
            role=role,
            auth_provider=AuthProvider.GOOGLE,
            first_name=first_name,
            last_name=last_name,
            is_verified=True,
            profile_picture=profile_picture,
            google_id=google_id,
        )

    @classmethod
    def reconstitute(cls, id: UUID, **attributes) -> "User":
        return cls(id=id, **attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"
