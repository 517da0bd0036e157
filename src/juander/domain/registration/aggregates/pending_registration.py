from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from juander.domain.shared.time import utc_now
from juander.domain.user import Email, OneTimeCode, OneTimeCodePurpose, User, UserRole


class PendingRegistration:
    """
    A registration awaiting confirmation by one-time code.

    No account exists yet. The draft holds the already hashed password and
    the hashed code, and is removed when promoted or once its code expires.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        password_hash: str,
        one_time_code: Optional[OneTimeCode],
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._first_name = first_name
        self._last_name = last_name
        self._password_hash = password_hash
        self._one_time_code = one_time_code
        self._id = id if id is not None else uuid4()
        self._created_at = created_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def one_time_code(self) -> Optional[OneTimeCode]:
        return self._one_time_code

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._one_time_code.expires_at if self._one_time_code else None

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def clear_one_time_code(self) -> None:
        self._one_time_code = None

    def record_failed_code_attempt(self) -> None:
        if self._one_time_code is not None:
            self._one_time_code = self._one_time_code.with_failed_attempt()

    def promote(self, role: UserRole = UserRole.TOURIST) -> User:
        """Create the verified account this draft stands for."""
        return User.create_local(
            email=self.email,
            first_name=self._first_name,
            last_name=self._last_name,
            role=role,
        )

    @classmethod
    def create(  # NOQA: PLR0913
        cls,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        password_hash: str,
        one_time_code: OneTimeCode,
    ) -> "PendingRegistration":
        if one_time_code.purpose != OneTimeCodePurpose.REGISTRATION:
            msg = "Registration drafts only accept registration codes"
            raise ValueError(msg)
        return cls(
            email=email,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=password_hash,
            one_time_code=one_time_code,
        )

    @classmethod
    def reconstitute(cls, id: UUID, **attributes) -> "PendingRegistration":
        return cls(id=id, **attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PendingRegistration):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"PendingRegistration(id={self._id}, email={self._email.value})"
