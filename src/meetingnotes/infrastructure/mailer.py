"""SMTP mail relay client for sharing summaries."""

import logging
from email.message import EmailMessage

import aiosmtplib

from meetingnotes.config import get_settings
from meetingnotes.errors import DeliveryError

logger = logging.getLogger(__name__)
settings = get_settings()


class Mailer:
    """Async client for a single SMTP relay account."""

    def __init__(
        self,
        hostname: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        use_tls: bool | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize mailer.

        Args:
            hostname: SMTP host (defaults to config)
            port: SMTP port (defaults to config)
            username: Relay account user (defaults to config)
            password: Relay account password (defaults to config)
            sender: From address (defaults to the account user)
            use_tls: Connect over implicit TLS (defaults to config)
            timeout_seconds: Per-connection timeout in seconds
        """
        self.hostname = hostname or settings.smtp_host
        self.port = port or settings.smtp_port
        self.username = username if username is not None else settings.email_user
        self.password = password if password is not None else settings.email_pass
        self.sender = sender or settings.sender_address or self.username
        self.use_tls = settings.smtp_use_tls if use_tls is None else use_tls
        self.timeout = timeout_seconds or settings.smtp_timeout_seconds

    def build_message(self, recipient: str, subject: str, body: str) -> EmailMessage:
        """Build a plain-text message for one recipient."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send one plain-text message.

        Raises:
            DeliveryError: the relay refused the message or could not be reached
        """
        message = self.build_message(recipient, subject, body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=self.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send summary email to {recipient}: {e}")
            raise DeliveryError(
                "Failed to share summary via email",
                failed_recipient=recipient,
                original_error=e,
            ) from e

        logger.info(f"Sent summary email to {recipient}")
