"""Logging configuration for the application."""

import logging
import sys

from mailrelay.core.config import get_settings


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # aiosmtplib logs every SMTP command at DEBUG, including AUTH.
    logging.getLogger("aiosmtplib").setLevel(logging.INFO)
