"""Read-only view over onboarding policy configuration.

A value stored in the ``configurations`` table wins; otherwise the matching
``Settings`` field applies. Unparseable or out-of-range stored values are logged
and ignored.
"""

from onboard.core.config import (
    MIN_LOGIN_LENGTH,
    MIN_RANDOM_PASSWORD_LENGTH,
    Settings,
    get_settings,
)
from onboard.core.logging import get_logger
from onboard.infrastructure.persistence.repositories.configuration_repository import (
    ConfigurationRepository,
)

logger = get_logger(__name__)

CONFIG_EMAIL_VERIFICATION = "email.verification"
CONFIG_REGISTER_SELF = "allow.soap.register"
CONFIG_BASE_URL = "application.base.url"
CONFIG_DEFAULT_GROUP = "default.group.id"
CONFIG_DEFAULT_LANG = "default.lang.id"
CONFIG_DEFAULT_TIMEZONE = "default.timezone"
CONFIG_LOGIN_MIN_LENGTH = "user.login.minimum.length"
CONFIG_RANDOM_PASSWORD_LENGTH = "user.random.password.length"

KNOWN_KEYS: dict[str, str] = {
    CONFIG_EMAIL_VERIFICATION: "Require email confirmation before login",
    CONFIG_REGISTER_SELF: "Allow self-service registration",
    CONFIG_BASE_URL: "Public base URL used in activation links",
    CONFIG_DEFAULT_GROUP: "Group new users join",
    CONFIG_DEFAULT_LANG: "Language id used when none is given",
    CONFIG_DEFAULT_TIMEZONE: "Timezone used when none is given",
    CONFIG_LOGIN_MIN_LENGTH: "Minimum login length",
    CONFIG_RANDOM_PASSWORD_LENGTH: "Length of generated throwaway passwords",
}

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class ConfigurationStore:
    """Configuration flags and defaults consumed by the workflows."""

    def __init__(
        self, repository: ConfigurationRepository, settings: Settings | None = None
    ) -> None:
        """Initialize the store.

        Args:
            repository: Repository holding runtime overrides.
            settings: Static settings used as fallback.
        """
        self.repository = repository
        self.settings = settings or get_settings()

    async def get_str(self, key: str, default: str | None = None) -> str | None:
        value = await self.repository.get_value(key)
        return default if value is None else value

    async def get_bool(self, key: str, default: bool = False) -> bool:
        """Read a boolean flag.

        Args:
            key: Configuration key.
            default: Value when the key is missing or unparseable.
        """
        value = await self.repository.get_value(key)
        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in _TRUE:
            return True
        if normalized in _FALSE:
            return False
        logger.warning("Ignoring non-boolean configuration value", key=key, value=value)
        return default

    async def get_int(self, key: str, default: int, minimum: int | None = None) -> int:
        """Read an integer.

        Args:
            key: Configuration key.
            default: Value when the key is missing, unparseable or below
                ``minimum``.
            minimum: Smallest accepted stored value.
        """
        value = await self.repository.get_value(key)
        if value is None:
            return default
        try:
            number = int(value.strip())
        except ValueError:
            logger.warning("Ignoring non-integer configuration value", key=key, value=value)
            return default
        if minimum is not None and number < minimum:
            logger.warning(
                "Ignoring out-of-range configuration value",
                key=key,
                value=number,
                minimum=minimum,
            )
            return default
        return number

    async def base_url(self) -> str:
        """Public base URL, normalised to end with ``/`` or empty."""
        url = (await self.get_str(CONFIG_BASE_URL, self.settings.base_url) or "").strip()
        if url and not url.endswith("/"):
            url += "/"
        return url

    async def email_verification_enabled(self) -> bool:
        return await self.get_bool(
            CONFIG_EMAIL_VERIFICATION, self.settings.email_verification_required
        )

    async def self_registration_enabled(self) -> bool:
        return await self.get_bool(CONFIG_REGISTER_SELF, self.settings.self_registration_enabled)

    async def default_group_id(self) -> str | None:
        return (await self.get_str(CONFIG_DEFAULT_GROUP, self.settings.default_group_id)) or None

    async def default_language_id(self) -> int:
        return await self.get_int(CONFIG_DEFAULT_LANG, self.settings.default_language_id)

    async def default_timezone(self) -> str:
        return (
            await self.get_str(CONFIG_DEFAULT_TIMEZONE, self.settings.default_timezone)
        ) or self.settings.default_timezone

    async def min_login_length(self) -> int:
        return await self.get_int(
            CONFIG_LOGIN_MIN_LENGTH, self.settings.min_login_length, minimum=MIN_LOGIN_LENGTH
        )

    async def random_password_length(self) -> int:
        return await self.get_int(
            CONFIG_RANDOM_PASSWORD_LENGTH,
            self.settings.random_password_length,
            minimum=MIN_RANDOM_PASSWORD_LENGTH,
        )
