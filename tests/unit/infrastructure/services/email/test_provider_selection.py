"""Unit tests for email provider selection."""

import pytest

from onboard.infrastructure.services.email import (
    LogEmailProvider,
    SMTPProvider,
    get_email_provider,
)


def test_log_provider_by_default(settings):
    assert isinstance(get_email_provider(settings), LogEmailProvider)


def test_smtp_provider(settings):
    settings = settings.model_copy(
        update={"email_provider": "smtp", "smtp_host": "smtp.example.com", "smtp_port": 2525}
    )

    provider = get_email_provider(settings)

    assert isinstance(provider, SMTPProvider)
    assert provider.settings.host == "smtp.example.com"
    assert provider.settings.port == 2525


def test_smtp_without_host_is_rejected(settings):
    with pytest.raises(ValueError, match="SMTP_HOST"):
        get_email_provider(settings.model_copy(update={"email_provider": "smtp"}))


@pytest.mark.asyncio
async def test_log_provider_records_messages():
    provider = LogEmailProvider()

    await provider.send_email("a@b.com", "Subject", "<p>x</p>", "x", "from@example.com", "From")

    assert provider.sent[0]["to"] == "a@b.com"
    assert provider.sent[0]["subject"] == "Subject"


def test_sender_name_is_quoted_when_needed():
    assert LogEmailProvider.format_sender("noreply@example.com", "Onboard") == (
        "Onboard <noreply@example.com>"
    )
    assert LogEmailProvider.format_sender("noreply@example.com", "Doe, Jane") == (
        '"Doe, Jane" <noreply@example.com>'
    )
    assert LogEmailProvider.format_sender("noreply@example.com", None) == "noreply@example.com"
