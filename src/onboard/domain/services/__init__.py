"""Domain services for onboarding."""

from onboard.domain.services.identity_link_service import IdentityLinkService
from onboard.domain.services.locale_resolver import (
    LocaleResolver,
    LocaleTag,
    ResolvedLocale,
    parse_locale_tag,
)
from onboard.domain.services.login_validator import LoginValidationError, LoginValidator
from onboard.domain.services.registration_service import RegistrationService

__all__ = [
    "IdentityLinkService",
    "LocaleResolver",
    "LocaleTag",
    "LoginValidationError",
    "LoginValidator",
    "RegistrationService",
    "ResolvedLocale",
    "parse_locale_tag",
]
