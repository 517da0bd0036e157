from juander.domain.user.value_objects.auth_provider import AuthProvider
from juander.domain.user.value_objects.email import Email
from juander.domain.user.value_objects.one_time_code import (
    OneTimeCode,
    OneTimeCodePurpose,
)
from juander.domain.user.value_objects.profile import (
    DEFAULT_LANGUAGE,
    MONTH_ABBREVIATIONS,
    SUPPORTED_LANGUAGES,
    Gender,
    normalize_language,
    parse_birthday,
    parse_country,
    parse_language,
)
from juander.domain.user.value_objects.user_role import UserRole

__all__ = [
    "DEFAULT_LANGUAGE",
    "MONTH_ABBREVIATIONS",
    "SUPPORTED_LANGUAGES",
    "AuthProvider",
    "Email",
    "Gender",
    "OneTimeCode",
    "OneTimeCodePurpose",
    "UserRole",
    "normalize_language",
    "parse_birthday",
    "parse_country",
    "parse_language",
]
