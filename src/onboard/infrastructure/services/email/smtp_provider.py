"""SMTP delivery through aiosmtplib."""

from email.message import EmailMessage

import aiosmtplib
from pydantic import BaseModel, ConfigDict

from onboard.core.logging import get_logger
from onboard.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class SMTPSettings(BaseModel):
    """Connection settings for the SMTP provider.

    ``use_ssl`` selects implicit TLS (usually port 465) and wins over
    ``use_tls``, which upgrades a plain connection with STARTTLS.
    """

    model_config = ConfigDict(from_attributes=True)

    host: str
    port: int = 587
    username: str | None = None
    password: str | None = None
    use_tls: bool = True
    use_ssl: bool = False
    timeout: int = 10

    @property
    def implicit_tls(self) -> bool:
        return self.use_ssl

    @property
    def start_tls(self) -> bool:
        return self.use_tls and not self.use_ssl


class SMTPProvider(EmailProvider):
    """Sends multipart (text and HTML) messages over SMTP."""

    def __init__(self, settings: SMTPSettings) -> None:
        self.settings = settings

    def build_message(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.format_sender(from_email, from_name)
        message["To"] = to
        if reply_to:
            message["Reply-To"] = reply_to
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        """Open a connection, authenticate when credentials are set and send.

        Raises:
            aiosmtplib.SMTPException: If connecting, authenticating or sending fails.
        """
        message = self.build_message(
            to, subject, html_body, text_body, from_email, from_name, reply_to
        )
        settings = self.settings

        try:
            async with aiosmtplib.SMTP(
                hostname=settings.host,
                port=settings.port,
                use_tls=settings.implicit_tls,
                start_tls=settings.start_tls,
                timeout=settings.timeout,
            ) as smtp:
                if settings.username:
                    await smtp.login(settings.username, settings.password or "")
                await smtp.send_message(message)
        except aiosmtplib.SMTPException as e:
            logger.error("SMTP delivery failed", host=settings.host, to=to, error=str(e))
            raise

        logger.info("Email sent via SMTP", host=settings.host, to=to)
        return True
