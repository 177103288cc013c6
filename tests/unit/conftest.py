"""Pytest configuration for unit tests.

Service tests run against mocked collaborators; the configuration store mock
answers with the out-of-the-box defaults unless a test overrides them.
"""

from unittest.mock import AsyncMock

import pytest

from onboard.domain.entities import User


@pytest.fixture
def mock_session():
    """Mock SQLAlchemy session."""
    return AsyncMock()


@pytest.fixture
def mock_config_store():
    """Configuration store answering with default policy values."""
    store = AsyncMock()
    store.base_url.return_value = ""
    store.email_verification_enabled.return_value = False
    store.self_registration_enabled.return_value = True
    store.default_group_id.return_value = None
    store.default_language_id.return_value = 1
    store.default_timezone.return_value = "UTC"
    store.min_login_length.return_value = 4
    store.random_password_length.return_value = 25
    return store


def _assign_id(user: User, password=None, updated_by=None) -> User:
    return user if user.id else user.evolve(id="user-1", updated_by=updated_by)


@pytest.fixture
def mock_user_repo():
    """User directory where every login and email is free."""
    repo = AsyncMock()
    repo.check_login_unique.return_value = True
    repo.check_email_unique.return_value = True
    repo.get_by_login.return_value = None
    repo.persist.side_effect = _assign_id
    return repo


@pytest.fixture
def mock_group_repo():
    """Mock group repository."""
    return AsyncMock()
