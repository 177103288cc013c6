"""Runtime configuration store."""

from onboard.infrastructure.configuration.config_store import (
    CONFIG_BASE_URL,
    CONFIG_DEFAULT_GROUP,
    CONFIG_DEFAULT_LANG,
    CONFIG_DEFAULT_TIMEZONE,
    CONFIG_EMAIL_VERIFICATION,
    CONFIG_LOGIN_MIN_LENGTH,
    CONFIG_RANDOM_PASSWORD_LENGTH,
    CONFIG_REGISTER_SELF,
    KNOWN_KEYS,
    ConfigurationStore,
)

__all__ = [
    "CONFIG_BASE_URL",
    "CONFIG_DEFAULT_GROUP",
    "CONFIG_DEFAULT_LANG",
    "CONFIG_DEFAULT_TIMEZONE",
    "CONFIG_EMAIL_VERIFICATION",
    "CONFIG_LOGIN_MIN_LENGTH",
    "CONFIG_RANDOM_PASSWORD_LENGTH",
    "CONFIG_REGISTER_SELF",
    "KNOWN_KEYS",
    "ConfigurationStore",
]
