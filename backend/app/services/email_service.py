"""Outbound transactional email over SMTP."""
import logging
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from app.errors import UnexpectedError

logger = logging.getLogger(__name__)


class Mailer:
    def __init__(
        self,
        hostname: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 10.0,
    ):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    def build_message(
        self,
        to_email: str,
        subject: str,
        body: str,
        html: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to_email
        message["Subject"] = subject
        if reply_to:
            message["Reply-To"] = reply_to
        message.set_content(body)
        if html:
            message.add_alternative(html, subtype="html")
        return message

    async def send(
        self,
        to_email: str,
        subject: str,
        body: str,
        html: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> None:
        if not self.sender:
            raise UnexpectedError("Email service is not configured")

        message = self.build_message(to_email, subject, body, html=html, reply_to=reply_to)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                start_tls=True,
                username=self.username or None,
                password=self.password or None,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise UnexpectedError("Failed to send email")
        logger.info("Sent email '%s' to %s", subject, to_email)
