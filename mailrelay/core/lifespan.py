"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (HTTP client, SMTP transport,
bootstrap admin, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from mailrelay.core.config import get_settings
from mailrelay.infrastructure.external.smtp.transport import SmtpMailTransport
from mailrelay.infrastructure.persistence.bootstrap import ensure_bootstrap_admin
from mailrelay.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client, SMTP transport, bootstrap admin.
    Shutdown order: HTTP client close, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for captcha verification (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=10.0)
    logger.info(
        "Captcha verification %s", "enabled" if settings.captcha_enabled else "disabled"
    )
    app.state.mail_transport = SmtpMailTransport.from_settings(settings)
    logger.info(
        "SMTP transport configured for %s:%d", settings.smtp_host, settings.smtp_port
    )

    try:
        await ensure_bootstrap_admin(settings)
    except SQLAlchemyError as e:
        logger.warning("Bootstrap admin skipped: database not ready (%s)", e)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    await dispose_engine()
