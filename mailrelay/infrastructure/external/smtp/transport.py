"""SMTP delivery through Microsoft 365 using aiosmtplib.

One connection per message: connect, STARTTLS, AUTH LOGIN with the
mailbox credential, send, quit. No pooling and no retries.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid

import aiosmtplib

from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.core.config import Settings

logger = logging.getLogger(__name__)


def build_message(mail: OutgoingMail) -> EmailMessage:
    """Build the MIME message. Bcc recipients go only into the envelope."""
    message = EmailMessage()
    if mail.display_name:
        message["From"] = formataddr((mail.display_name, mail.header_from))
    else:
        message["From"] = mail.header_from
    message["To"] = ", ".join(mail.to)
    if mail.cc:
        message["Cc"] = ", ".join(mail.cc)
    message["Subject"] = mail.subject
    message["Date"] = formatdate(localtime=False)
    message["Message-ID"] = make_msgid(domain=mail.header_from.rpartition("@")[2] or None)
    if mail.is_html:
        message.set_content(mail.body, subtype="html")
    else:
        message.set_content(mail.body)
    return message


class SmtpMailTransport:
    """Send OutgoingMail over SMTP (STARTTLS on 587 by default)."""

    def __init__(
        self,
        hostname: str,
        port: int,
        *,
        start_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self._hostname = hostname
        self._port = port
        self._start_tls = start_tls
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> SmtpMailTransport:
        return cls(
            settings.smtp_host,
            settings.smtp_port,
            start_tls=settings.smtp_start_tls,
            timeout=settings.smtp_timeout_seconds,
        )

    async def send(self, mail: OutgoingMail) -> None:
        """Deliver mail; aiosmtplib.SMTPException and OSError propagate to the caller."""
        message = build_message(mail)
        # Port 465 is implicit TLS; anything else upgrades with STARTTLS when enabled.
        use_tls = self._port == 465
        await aiosmtplib.send(
            message,
            sender=mail.header_from,
            recipients=mail.recipients,
            hostname=self._hostname,
            port=self._port,
            username=mail.auth_email,
            password=mail.auth_password,
            use_tls=use_tls,
            start_tls=self._start_tls and not use_tls,
            timeout=self._timeout,
        )
        logger.debug(
            "SMTP accepted message from %s for %d recipient(s)",
            mail.header_from,
            len(mail.recipients),
        )
