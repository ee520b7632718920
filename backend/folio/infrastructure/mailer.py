"""SMTP Mailer — delivers rendered contact emails through an SMTP relay.

Invariants:
    - One delivery attempt per call; no retry (caller reports a single failure)
    - smtplib errors, socket errors and timeouts are all mapped to DeliveryError
    - Credentials are only sent when a password is configured

Design Decisions:
    - Blocking smtplib runs in asyncio.to_thread with a socket timeout so a slow
      relay cannot stall the event loop or hang a request forever
    - STARTTLS on by default: port 587 submission (SendGrid and most providers)
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from folio.core.contact import OutgoingEmail
from folio.core.errors import DeliveryError

logger = logging.getLogger(__name__)


def build_message(email: OutgoingEmail) -> EmailMessage:
    """multipart/alternative message with text and HTML parts."""
    msg = EmailMessage()
    msg["From"] = email.sender
    msg["To"] = email.recipient
    msg["Subject"] = email.subject
    if email.reply_to:
        msg["Reply-To"] = email.reply_to
    msg.set_content(email.text)
    msg.add_alternative(email.html, subtype="html")
    return msg


class SmtpMailer:
    """MailTransport implementation over smtplib."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        starttls: bool = True,
        timeout_seconds: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.starttls = starttls
        self.timeout_seconds = timeout_seconds

    async def send(self, email: OutgoingEmail) -> None:
        """Deliver one email or raise DeliveryError."""
        message = build_message(email)
        try:
            await asyncio.to_thread(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                f"SMTP delivery failed: {e}",
                extra={"recipient": email.recipient},
            )
            raise DeliveryError(type(e).__name__)
        logger.info("Contact email sent", extra={"recipient": email.recipient})

    def _send_blocking(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.host, self.port, timeout=self.timeout_seconds,
        ) as smtp:
            if self.starttls:
                smtp.starttls()
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(message)
