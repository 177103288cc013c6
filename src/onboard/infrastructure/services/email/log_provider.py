"""Development email provider that writes emails to the log."""

from onboard.core.logging import get_logger
from onboard.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class LogEmailProvider(EmailProvider):
    """Logs outgoing emails instead of delivering them.

    The last messages are kept in ``sent`` so local runs can inspect them.
    """

    def __init__(self) -> None:
        self.sent: list[dict[str, str | None]] = []

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
        self.sent.append(
            {
                "to": to,
                "subject": subject,
                "text_body": text_body,
                "html_body": html_body,
                "from": self.format_sender(from_email, from_name),
                "reply_to": reply_to,
            }
        )
        logger.info(
            "[EMAIL] Message not delivered (log provider)",
            to=to,
            subject=subject,
            body=text_body,
        )
        return True
