"""Configuration management for Onboard.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Values stored in the ``configurations``
table override the policy-related settings at runtime (see
``onboard.infrastructure.configuration.config_store``).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_LOGIN_LENGTH = 1
MIN_RANDOM_PASSWORD_LENGTH = 16


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ONBOARD_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Onboard"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/onboard.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Registration Policy
    base_url: str = Field(
        default="",
        description="Public base URL; confirmation emails are only required when set",
    )
    email_verification_required: bool = False
    self_registration_enabled: bool = False
    min_login_length: int = Field(default=4, ge=MIN_LOGIN_LENGTH)
    random_password_length: int = Field(default=25, ge=MIN_RANDOM_PASSWORD_LENGTH)

    # Defaults applied to new accounts
    default_group_id: str | None = None
    default_language_id: int = 1
    default_timezone: str = "UTC"

    # Email Settings
    email_provider: Literal["log", "smtp"] = "log"
    mail_from: str = "noreply@localhost"
    mail_from_name: str = "Onboard"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    smtp_timeout: int = 10

    @field_validator("base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        """Normalise the base URL so link building can append paths."""
        v = v.strip()
        if v and not v.endswith("/"):
            v += "/"
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
