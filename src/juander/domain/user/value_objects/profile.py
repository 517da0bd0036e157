"""Profile attribute value objects and parsers."""

from datetime import date
from enum import Enum

from juander.domain.shared.time import today_utc
from juander.domain.user.exceptions import InvalidProfileValueError

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
MIN_BIRTH_YEAR = 1900

SUPPORTED_LANGUAGES = ("en", "tl")
DEFAULT_LANGUAGE = "en"

MAX_COUNTRY_LENGTH = 100


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> "Gender":
        """Parse a gender case-insensitively ("male" -> Gender.MALE)."""
        normalized = (value or "").strip().capitalize()
        try:
            return cls(normalized)
        except ValueError:
            msg = "Invalid gender selected"
            raise InvalidProfileValueError(msg, "gender") from None


def parse_birthday(
    month: str,
    day: int,
    year: int,
    today: date | None = None,
) -> date:
    """Build a birthday from a month abbreviation, day and year.

    Parameters
    ----------
    month
        Three-letter month abbreviation ("Jan" .. "Dec"), case-insensitive
    day
        Day of month
    year
        Four-digit year between 1900 and the current year

    Returns
    -------
    The birthday as a date

    Raises
    ------
    InvalidProfileValueError
        If any part is out of range or the date does not exist
    """
    today = today or today_utc()
    abbreviation = (month or "").strip().capitalize()
    if abbreviation not in MONTH_ABBREVIATIONS:
        msg = "Invalid month"
        raise InvalidProfileValueError(msg, "birthday")

    if not MIN_BIRTH_YEAR <= year <= today.year:
        msg = f"Year must be between {MIN_BIRTH_YEAR} and {today.year}"
        raise InvalidProfileValueError(msg, "birthday")

    try:
        birthday = date(year, MONTH_ABBREVIATIONS.index(abbreviation) + 1, day)
    except ValueError:
        msg = "Invalid date"
        raise InvalidProfileValueError(msg, "birthday") from None

    if birthday > today:
        msg = "Birthday cannot be in the future"
        raise InvalidProfileValueError(msg, "birthday")

    return birthday


def parse_country(value: str) -> str:
    """Validate a country name (letters and spaces only)."""
    country = " ".join((value or "").split())
    if not country or len(country) > MAX_COUNTRY_LENGTH:
        msg = "Country is required"
        raise InvalidProfileValueError(msg, "country")
    if not all(ch.isalpha() or ch == " " for ch in country):
        msg = "Country can only contain letters and spaces"
        raise InvalidProfileValueError(msg, "country")
    return country


def parse_language(value: str) -> str:
    language = (value or "").strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        msg = "Invalid language. Must be 'en' or 'tl'"
        raise InvalidProfileValueError(msg, "language")
    return language


def normalize_language(value: str | None) -> str:
    """Map stored values onto a supported language, falling back to English."""
    language = (value or "").strip().lower()
    return language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
