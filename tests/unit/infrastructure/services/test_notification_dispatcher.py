"""Unit tests for NotificationDispatcher."""

from unittest.mock import AsyncMock

import pytest

from onboard.infrastructure.services import NotificationDispatcher, build_activation_url
from onboard.infrastructure.services.email import LogEmailProvider


@pytest.fixture
def provider() -> LogEmailProvider:
    return LogEmailProvider()


@pytest.fixture
def dispatcher(provider, mock_config_store, settings) -> NotificationDispatcher:
    mock_config_store.base_url.return_value = "https://meet.example.com/"
    return NotificationDispatcher(provider=provider, config_store=mock_config_store, settings=settings)


class TestBuildActivationUrl:
    """Tests for build_activation_url."""

    def test_with_base_url(self):
        assert (
            build_activation_url("https://meet.example.com/", "abc-123")
            == "https://meet.example.com/activate?u=abc-123"
        )

    def test_adds_missing_slash(self):
        assert build_activation_url("https://x.test", "t") == "https://x.test/activate?u=t"

    def test_token_is_quoted(self):
        assert build_activation_url("https://x.test/", "a b&c").endswith("u=a%20b%26c")

    def test_without_base_url(self):
        assert build_activation_url("", "abc-123") == ""


@pytest.mark.asyncio
async def test_activation_email_contains_token_and_link(dispatcher, provider):
    """Test that the activation email carries the token and activation URL."""
    sent = await dispatcher.send_activation(
        login="validuser",
        email="a@b.com",
        token="tok-123",
        confirmation_required=True,
        language_id=1,
    )

    assert sent is True
    (message,) = provider.sent
    assert message["to"] == "a@b.com"
    assert message["subject"] == "Onboard: confirm your account"
    assert "https://meet.example.com/activate?u=tok-123" in message["text_body"]
    assert "https://meet.example.com/activate?u=tok-123" in message["html_body"]
    assert "validuser" in message["text_body"]


@pytest.mark.asyncio
async def test_notice_when_confirmation_not_required(dispatcher, provider):
    await dispatcher.send_activation(
        login="validuser",
        email="a@b.com",
        token="tok-123",
        confirmation_required=False,
        language_id=1,
    )

    (message,) = provider.sent
    assert message["subject"] == "Onboard: welcome"
    assert "activate?u=" not in message["text_body"]


@pytest.mark.asyncio
async def test_email_in_user_language(dispatcher, provider):
    await dispatcher.send_activation("validuser", "a@b.com", "t", True, language_id=2)

    assert provider.sent[0]["subject"] == "Onboard: Konto bestätigen"


@pytest.mark.asyncio
async def test_unsupported_language_falls_back_to_english(dispatcher, provider):
    await dispatcher.send_activation("validuser", "a@b.com", "t", True, language_id=14)

    assert provider.sent[0]["subject"] == "Onboard: confirm your account"


@pytest.mark.asyncio
async def test_html_body_escapes_login(dispatcher, provider):
    await dispatcher.send_activation("<b>x</b>", "a@b.com", "t", False, language_id=1)

    message = provider.sent[0]
    assert "&lt;b&gt;x&lt;/b&gt;" in message["html_body"]
    assert "<b>x</b>" in message["text_body"]


@pytest.mark.asyncio
async def test_sender_comes_from_settings(mock_config_store, settings):
    provider = AsyncMock()
    provider.send_email.return_value = True
    settings = settings.model_copy(update={"mail_from": "hello@example.com", "mail_from_name": "Hello"})
    dispatcher = NotificationDispatcher(provider=provider, config_store=mock_config_store, settings=settings)

    await dispatcher.send_activation("validuser", "a@b.com", "t", False, language_id=1)

    call = provider.send_email.call_args.kwargs
    assert call["from_email"] == "hello@example.com"
    assert call["from_name"] == "Hello"


@pytest.mark.asyncio
async def test_provider_errors_propagate(mock_config_store, settings):
    provider = AsyncMock()
    provider.send_email.side_effect = ConnectionError("smtp down")
    dispatcher = NotificationDispatcher(provider=provider, config_store=mock_config_store, settings=settings)

    with pytest.raises(ConnectionError):
        await dispatcher.send_activation("validuser", "a@b.com", "t", True, language_id=1)
