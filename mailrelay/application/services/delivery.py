"""Bounded hand-off to the SMTP collaborator."""

from __future__ import annotations

import asyncio
import logging

from aiosmtplib import SMTPException

from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.application.interfaces.services import IMailTransport
from mailrelay.domain.exceptions import DeliveryFailedException

logger = logging.getLogger(__name__)


async def deliver_with_timeout(
    transport: IMailTransport, mail: OutgoingMail, timeout_seconds: float
) -> None:
    """Send once within timeout_seconds; no retry.

    Raises:
        DeliveryFailedException: Timeout, SMTP error, or network error, with the original text.
    """
    try:
        await asyncio.wait_for(transport.send(mail), timeout=timeout_seconds)
    except TimeoutError as e:
        logger.warning("SMTP delivery from %s timed out after %ss", mail.header_from, timeout_seconds)
        raise DeliveryFailedException(f"SMTP timed out after {timeout_seconds} seconds") from e
    except (SMTPException, OSError) as e:
        logger.warning("SMTP delivery from %s failed: %s", mail.header_from, e)
        raise DeliveryFailedException(str(e) or e.__class__.__name__) from e
