"""Notification dispatcher for registration emails.

Sends either the activation email (confirmation required, carries the
activation link) or a plain registration notice, in the user's language.
"""

from urllib.parse import quote

from onboard.core.config import Settings, get_settings
from onboard.core.logging import get_logger
from onboard.infrastructure.configuration.config_store import ConfigurationStore
from onboard.infrastructure.i18n.locale_catalog import LocaleCatalog, locale_catalog
from onboard.infrastructure.services.email.email_provider import EmailProvider
from onboard.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)
from onboard.infrastructure.services.email.templates import (
    ACTIVATION,
    REGISTRATION_NOTICE,
    get_template,
)

logger = get_logger(__name__)


def build_activation_url(base_url: str, token: str) -> str:
    """Build the link that activates an account.

    Returns:
        ``{base_url}activate?u={token}``, or an empty string without a base URL.
    """
    if not base_url:
        return ""
    if not base_url.endswith("/"):
        base_url += "/"
    return f"{base_url}activate?u={quote(token, safe='')}"


class NotificationDispatcher:
    """Renders and sends registration emails."""

    def __init__(
        self,
        provider: EmailProvider,
        config_store: ConfigurationStore,
        settings: Settings | None = None,
        catalog: LocaleCatalog | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            provider: Email provider used for delivery.
            config_store: Source of the public base URL.
            settings: Sender identity and application name.
            catalog: Maps language ids to template locales.
            renderer: Jinja2 renderer.
        """
        self.provider = provider
        self.config_store = config_store
        self.settings = settings or get_settings()
        self.catalog = catalog or locale_catalog
        self.renderer = renderer or get_template_renderer()

    async def send_activation(
        self,
        login: str,
        email: str,
        token: str,
        confirmation_required: bool,
        language_id: int | None,
    ) -> bool:
        """Send the registration email for a new account.

        Args:
            login: Login of the new account.
            email: Recipient address.
            token: Activation token.
            confirmation_required: Send the activation link (True) or only a
                registration notice (False).
            language_id: Language of the email.

        Returns:
            Whatever the provider reports for the delivery.

        Raises:
            Exception: Provider and rendering errors propagate to the caller.
        """
        template_type = ACTIVATION if confirmation_required else REGISTRATION_NOTICE
        locale = self.catalog.language_code(language_id)
        template = get_template(template_type, locale)

        base_url = await self.config_store.base_url()
        variables = {
            "app_name": self.settings.app_name,
            "login": login,
            "email": email,
            "token": token,
            "activation_url": build_activation_url(base_url, token),
        }

        rendered = self.renderer.render_message(template, variables)

        sent = await self.provider.send_email(
            to=email,
            subject=rendered.subject,
            html_body=rendered.html_body,
            text_body=rendered.text_body,
            from_email=self.settings.mail_from,
            from_name=self.settings.mail_from_name,
        )
        logger.info(
            "Registration email dispatched",
            login=login,
            template_type=template_type,
            locale=locale,
            sent=sent,
        )
        return sent
