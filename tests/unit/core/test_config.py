import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from onboard.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    get_settings.cache_clear()

    settings = Settings(_env_file=None)

    assert settings.app_name == "Onboard"
    assert settings.environment == "development"
    assert settings.base_url == ""
    assert settings.email_verification_required is False
    assert settings.self_registration_enabled is False
    assert settings.min_login_length == 4
    assert settings.random_password_length == 25
    assert settings.default_language_id == 1
    assert settings.default_timezone == "UTC"
    assert settings.default_group_id is None
    assert settings.email_provider == "log"
    assert settings.is_development is True


def test_settings_env_override():
    """Test that environment variables override defaults."""
    get_settings.cache_clear()

    with patch.dict(
        os.environ,
        {
            "ONBOARD_ENVIRONMENT": "production",
            "ONBOARD_SELF_REGISTRATION_ENABLED": "true",
            "ONBOARD_MIN_LOGIN_LENGTH": "6",
            "ONBOARD_DEFAULT_TIMEZONE": "Europe/Berlin",
        },
    ):
        settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.self_registration_enabled is True
        assert settings.min_login_length == 6
        assert settings.default_timezone == "Europe/Berlin"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://meet.example.com", "https://meet.example.com/"),
        ("  https://meet.example.com/ ", "https://meet.example.com/"),
        ("", ""),
    ],
)
def test_base_url_normalised(value, expected):
    assert Settings(_env_file=None, base_url=value).base_url == expected


def test_random_password_length_minimum():
    """Test that throwaway passwords cannot be configured too short."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, random_password_length=8)


def test_min_login_length_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, min_login_length=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()
