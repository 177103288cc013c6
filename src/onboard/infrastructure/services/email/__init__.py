"""Email providers, templates and rendering."""

from onboard.core.config import Settings
from onboard.infrastructure.services.email.email_provider import EmailProvider
from onboard.infrastructure.services.email.log_provider import LogEmailProvider
from onboard.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from onboard.infrastructure.services.email.template_renderer import (
    RenderedEmail,
    TemplateRenderer,
    get_template_renderer,
)
from onboard.infrastructure.services.email.templates import (
    ACTIVATION,
    REGISTRATION_NOTICE,
    EmailTemplate,
    get_template,
)


def get_email_provider(settings: Settings) -> EmailProvider:
    """Select the email provider configured in settings.

    Raises:
        ValueError: If SMTP is selected without a host.
    """
    if settings.email_provider == "smtp":
        if not settings.smtp_host:
            raise ValueError("ONBOARD_SMTP_HOST is required when email_provider is 'smtp'")
        return SMTPProvider(
            SMTPSettings(
                host=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
                use_ssl=settings.smtp_use_ssl,
                timeout=settings.smtp_timeout,
            )
        )
    return LogEmailProvider()


__all__ = [
    "ACTIVATION",
    "EmailProvider",
    "EmailTemplate",
    "LogEmailProvider",
    "REGISTRATION_NOTICE",
    "SMTPProvider",
    "SMTPSettings",
    "RenderedEmail",
    "TemplateRenderer",
    "get_email_provider",
    "get_template",
    "get_template_renderer",
]
