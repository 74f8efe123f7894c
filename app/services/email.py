import logging
from typing import Optional, Sequence

import aiosmtplib
from email.message import EmailMessage
from app.core.config import Settings

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP transport for outgoing notification mail."""

    def __init__(
        self,
        hostname: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "no-reply@cems.local",
        start_tls: bool = True,
    ):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.start_tls = start_tls

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["Mailer"]:
        if not settings.SMTP_HOST:
            return None
        return cls(
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.SMTP_FROM,
            start_tls=settings.SMTP_START_TLS,
        )

    def build_message(self, bcc: Sequence[str], subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["Bcc"] = ", ".join(bcc)
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send_bulk(self, bcc: Sequence[str], subject: str, body: str) -> None:
        message = self.build_message(bcc, subject, body)

        await aiosmtplib.send(
            message,
            hostname=self.hostname,
            port=self.port,
            start_tls=self.start_tls,
            username=self.username,
            password=self.password,
        )
        logger.info("Sent '%s' to %d recipient(s)", subject, len(bcc))
