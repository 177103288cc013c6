"""Unit tests for IdentityLinkService."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from onboard.core.errors import CollaboratorError, UniquenessViolationError
from onboard.domain.entities import (
    Address,
    Group,
    IdentityAssertion,
    Rejection,
    Right,
    User,
    UserType,
)
from onboard.domain.services.identity_link_service import SYSTEM_ACTOR, IdentityLinkService
from onboard.infrastructure.i18n import locale_catalog

PROVIDER = "google"


@pytest.fixture
def mock_hasher():
    """Credential hasher returning predictable random passwords."""
    hasher = MagicMock()
    hasher.random_password.side_effect = lambda length=25: f"random-{length}"
    return hasher


@pytest.fixture
def link_service(
    mock_session, mock_user_repo, mock_group_repo, mock_config_store, mock_hasher
):
    """IdentityLinkService instance with mocked dependencies."""
    return IdentityLinkService(
        session=mock_session,
        user_repo=mock_user_repo,
        group_repo=mock_group_repo,
        config_store=mock_config_store,
        hasher=mock_hasher,
        catalog=locale_catalog,
    )


def _assertion(**kwargs) -> IdentityAssertion:
    defaults = {
        "uid": "1184732",
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
    }
    defaults.update(kwargs)
    return IdentityAssertion(**defaults)


def _existing(**kwargs) -> User:
    defaults = {
        "id": "existing-1",
        "login": "1184732",
        "type": UserType.OAUTH,
        "domain_id": PROVIDER,
        "address": Address(email="jane@example.com", country="DE"),
        "language_id": 2,
        "timezone_id": "Europe/Berlin",
        "password_hash": "$argon2id$old",
    }
    defaults.update(kwargs)
    return User(**defaults)


@pytest.mark.asyncio
async def test_invalid_uid_touches_nothing(link_service, mock_user_repo):
    """Test that a uid failing login validation is rejected."""
    result = await link_service.link_or_create(_assertion(uid="a b c d"), PROVIDER)

    assert result.rejection == Rejection.INVALID_LOGIN
    mock_user_repo.get_by_login.assert_not_called()
    mock_user_repo.persist.assert_not_called()


@pytest.mark.asyncio
async def test_short_uid_is_invalid(link_service):
    result = await link_service.link_or_create(_assertion(uid="abc"), PROVIDER)

    assert result.rejection == Rejection.INVALID_LOGIN


@pytest.mark.asyncio
async def test_new_account_is_provisioned(link_service, mock_user_repo, mock_session):
    """Test provisioning of an account for an unknown uid."""
    result = await link_service.link_or_create(
        _assertion(picture="https://img.example.com/jane.png"), PROVIDER
    )

    assert result.ok
    user = mock_user_repo.persist.call_args.args[0]
    assert user.id is None
    assert user.login == "1184732"
    assert user.type == UserType.OAUTH
    assert user.domain_id == PROVIDER
    assert user.first_name == "Jane"
    assert user.email == "jane@example.com"
    assert user.show_contact_data_to_contacts is True
    assert user.picture_uri == "https://img.example.com/jane.png"
    assert user.language_id == 1
    assert user.timezone_id == "UTC"
    assert user.last_login is not None
    mock_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_new_account_never_gets_login_right(link_service, mock_user_repo):
    await link_service.link_or_create(_assertion(), PROVIDER)

    user = mock_user_repo.persist.call_args.args[0]
    assert Right.LOGIN not in user.rights
    assert Right.ROOM in user.rights


@pytest.mark.asyncio
async def test_new_account_joins_default_group(
    link_service, mock_config_store, mock_group_repo, mock_user_repo
):
    mock_config_store.default_group_id.return_value = "group-1"
    mock_group_repo.get_by_id.return_value = Group(id="group-1", name="Members")

    await link_service.link_or_create(_assertion(), PROVIDER)

    assert mock_user_repo.persist.call_args.args[0].group_ids == ["group-1"]


@pytest.mark.asyncio
async def test_locale_tag_sets_language_and_country(link_service, mock_user_repo):
    """Test that 'fr-FR' resolves to French and country FR."""
    await link_service.link_or_create(_assertion(locale="fr-FR"), PROVIDER)

    user = mock_user_repo.persist.call_args.args[0]
    assert user.language_id == 3
    assert user.country == "FR"


@pytest.mark.asyncio
async def test_locale_without_region_keeps_country(link_service, mock_user_repo):
    mock_user_repo.get_by_login.return_value = _existing()

    await link_service.link_or_create(_assertion(locale="fr"), PROVIDER)

    user = mock_user_repo.persist.call_args.args[0]
    assert user.language_id == 3
    assert user.country == "DE"


@pytest.mark.asyncio
async def test_unparseable_locale_keeps_existing_values(link_service, mock_user_repo):
    mock_user_repo.get_by_login.return_value = _existing()

    await link_service.link_or_create(_assertion(locale="not a locale"), PROVIDER)

    user = mock_user_repo.persist.call_args.args[0]
    assert user.language_id == 2
    assert user.country == "DE"


@pytest.mark.asyncio
async def test_unparseable_locale_uses_defaults_for_new_account(link_service, mock_user_repo):
    await link_service.link_or_create(_assertion(locale="%%"), PROVIDER)

    user = mock_user_repo.persist.call_args.args[0]
    assert user.language_id == 1
    assert user.country is None


@pytest.mark.asyncio
async def test_existing_account_is_reused(link_service, mock_user_repo):
    """Test that linking updates the found account instead of creating one."""
    mock_user_repo.get_by_login.return_value = _existing()

    result = await link_service.link_or_create(_assertion(), PROVIDER)

    assert result.user.id == "existing-1"
    user = mock_user_repo.persist.call_args.args[0]
    assert user.id == "existing-1"
    mock_user_repo.get_by_login.assert_called_once_with("1184732", UserType.OAUTH, PROVIDER)
    assert mock_user_repo.check_email_unique.call_args.kwargs["exclude_id"] == "existing-1"


@pytest.mark.asyncio
async def test_credential_is_rotated(link_service, mock_user_repo, mock_hasher, mock_config_store):
    """Test that every link stores a fresh random password."""
    mock_user_repo.get_by_login.return_value = _existing()
    mock_config_store.random_password_length.return_value = 32

    await link_service.link_or_create(_assertion(), PROVIDER)

    mock_hasher.random_password.assert_called_once_with(32)
    args = mock_user_repo.persist.call_args
    assert args.args[1] == "random-32"
    assert args.kwargs["updated_by"] == SYSTEM_ACTOR


@pytest.mark.asyncio
async def test_email_conflict_mutates_nothing(link_service, mock_user_repo, mock_session):
    """Test that an email held by another account is rejected."""
    mock_user_repo.check_email_unique.return_value = False

    result = await link_service.link_or_create(_assertion(), PROVIDER)

    assert result.rejection == Rejection.EMAIL_CONFLICT
    mock_user_repo.persist.assert_not_called()
    mock_session.commit.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_creation_relinks_once(link_service, mock_user_repo):
    """Test that losing a creation race links the winner's account."""
    winner = _existing()
    mock_user_repo.get_by_login.side_effect = [None, winner]
    mock_user_repo.persist.side_effect = [
        UniquenessViolationError("login"),
        winner.evolve(updated_by=SYSTEM_ACTOR),
    ]

    result = await link_service.link_or_create(_assertion(), PROVIDER)

    assert result.user.id == "existing-1"
    assert mock_user_repo.persist.call_count == 2
    assert mock_user_repo.persist.call_args_list[1].args[0].id == "existing-1"


@pytest.mark.asyncio
async def test_repeated_conflict_raises(link_service, mock_user_repo):
    mock_user_repo.persist.side_effect = UniquenessViolationError("login")

    with pytest.raises(CollaboratorError):
        await link_service.link_or_create(_assertion(), PROVIDER)

    assert mock_user_repo.persist.call_count == 2


@pytest.mark.asyncio
async def test_storage_failure_propagates(link_service, mock_user_repo, mock_session):
    mock_user_repo.get_by_login.side_effect = OperationalError("SELECT", {}, Exception("gone"))

    with pytest.raises(CollaboratorError) as exc_info:
        await link_service.link_or_create(_assertion(), PROVIDER)

    assert isinstance(exc_info.value.__cause__, OperationalError)
    mock_session.rollback.assert_called_once()


@pytest.mark.asyncio
async def test_hashing_failure_propagates(link_service, mock_hasher):
    mock_hasher.random_password.side_effect = ValueError("bad length")

    with pytest.raises(CollaboratorError):
        await link_service.link_or_create(_assertion(), PROVIDER)


@pytest.mark.asyncio
async def test_missing_default_group_propagates(
    link_service, mock_config_store, mock_group_repo, mock_user_repo
):
    mock_config_store.default_group_id.return_value = "missing"
    mock_group_repo.get_by_id.return_value = None

    with pytest.raises(CollaboratorError):
        await link_service.link_or_create(_assertion(), PROVIDER)

    mock_user_repo.persist.assert_not_called()
