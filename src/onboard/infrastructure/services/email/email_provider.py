"""Delivery interface for registration emails."""

from abc import ABC, abstractmethod
from email.utils import formataddr


class EmailProvider(ABC):
    """Delivers one rendered message (plain text and HTML alternatives)."""

    @staticmethod
    def format_sender(from_email: str, from_name: str | None) -> str:
        """Build an RFC 5322 ``From`` value, quoting the name when needed."""
        return formataddr((from_name or "", from_email))

    @abstractmethod
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
        """Deliver a message.

        Returns:
            True when the transport accepted the message, False when it
            declined without raising.

        Raises:
            Exception: Transport errors propagate; the notification
                dispatcher's caller turns them into a ``notification_error``.
        """
