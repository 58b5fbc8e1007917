"""First-run admin provisioning, shared by the lifespan hook and scripts/create_user.py."""

from __future__ import annotations

import asyncio
import logging

from mailrelay.core.config import Settings
from mailrelay.domain.enums import UserRole
from mailrelay.domain.value_objects import normalize_email
from mailrelay.infrastructure.persistence.database import get_session_factory
from mailrelay.infrastructure.persistence.models.user import User
from mailrelay.infrastructure.persistence.repositories.user_repo import UserRepository
from mailrelay.infrastructure.security.password import get_password_hash

logger = logging.getLogger(__name__)


async def create_user_with_role(
    email: str,
    password: str,
    role: UserRole,
    must_change_password: bool,
) -> User | None:
    """Create a user in its own transaction. Returns None if the email already exists."""
    normalized = normalize_email(email)
    password_hash = await asyncio.to_thread(get_password_hash, password)
    factory = get_session_factory()
    async with factory() as session:
        async with session.begin():
            repo = UserRepository(session)
            if await repo.get_by_email(normalized) is not None:
                return None
            return await repo.create_user(
                normalized,
                password_hash,
                role=role,
                must_change_password=must_change_password,
            )


async def ensure_bootstrap_admin(settings: Settings) -> None:
    """Create BOOTSTRAP_ADMIN_EMAIL as admin (must change password) if it does not exist."""
    if not settings.bootstrap_admin_email or settings.bootstrap_admin_password is None:
        return
    password = settings.bootstrap_admin_password.get_secret_value()
    if len(password) < settings.min_password_length:
        logger.warning("Bootstrap admin skipped: BOOTSTRAP_ADMIN_PASSWORD is too short")
        return
    user = await create_user_with_role(
        settings.bootstrap_admin_email,
        password,
        UserRole.ADMIN,
        must_change_password=True,
    )
    if user is None:
        logger.info("Bootstrap admin already exists; nothing to do")
    else:
        logger.info("Bootstrap admin %s created", user.id)
