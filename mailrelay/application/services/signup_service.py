"""Signup and email verification flow.

Signup stores a pending row (password already hashed) and mails a
single-use link; verify consumes the row atomically and creates the user.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mailrelay.application.dtos.user import FlowResult
from mailrelay.application.interfaces.services import (
    IAuthSecurity,
    ICaptchaVerifier,
    IUnitOfWork,
)
from mailrelay.application.services.session_service import validate_password_strength
from mailrelay.application.services.system_mail_service import SystemMailService
from mailrelay.domain.enums import UserRole
from mailrelay.domain.exceptions import (
    DeliveryFailedException,
    EmailAlreadyRegisteredException,
    SenderInactiveException,
    ValidationException,
)
from mailrelay.domain.value_objects import normalize_email

logger = logging.getLogger(__name__)

PENDING_MESSAGE = "Check your email for a verification link."
VERIFIED_MESSAGE = "Email verified. You can now sign in."


class SignupService:
    """Signup(email, password) and Verify(token)."""

    def __init__(
        self,
        user_repo: Any,
        pending_store: Any,
        auth_security: IAuthSecurity,
        captcha: ICaptchaVerifier,
        uow: IUnitOfWork,
        system_mail: SystemMailService | None = None,
        *,
        min_password_length: int = 8,
        token_ttl_minutes: int = 30,
        conceal_existing_email: bool = False,
    ) -> None:
        self._user_repo = user_repo
        self._pending_store = pending_store
        self._auth_security = auth_security
        self._captcha = captcha
        self._uow = uow
        self._system_mail = system_mail
        self._min_password_length = min_password_length
        self._token_ttl_minutes = token_ttl_minutes
        self._conceal_existing_email = conceal_existing_email

    async def signup(
        self,
        email: str,
        password: str,
        captcha_token: str | None = None,
        remote_ip: str | None = None,
    ) -> FlowResult:
        """Create a pending signup and mail the verification link.

        The pending row is committed before SMTP runs; if delivery fails or
        the default sender was deactivated meanwhile, the row is removed again.

        Raises:
            ValidationException: Blank email or short password.
            EmailAlreadyRegisteredException: Email belongs to a user (unless concealment is on).
            SenderInactiveException: No usable default sender; nothing is written.
            DeliveryFailedException: Verification mail could not be sent.
        """
        await self._captcha.verify(captcha_token, remote_ip)
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationException("Email is required", field="email")
        validate_password_strength(password, self._min_password_length)
        if await self._user_repo.get_by_email(normalized) is not None:
            if self._conceal_existing_email:
                logger.info("Signup for existing email answered as pending")
                return FlowResult(status="pending", message=PENDING_MESSAGE)
            raise EmailAlreadyRegisteredException(normalized)
        if self._system_mail is None:
            raise RuntimeError("SignupService.signup requires a SystemMailService")
        await self._system_mail.ensure_available()

        password_hash = await asyncio.to_thread(self._auth_security.hash_password, password)
        raw_token, row_id, _ = await self._pending_store.create(normalized, password_hash)
        await self._uow.commit()

        try:
            await self._system_mail.send_verification(
                normalized, raw_token, self._token_ttl_minutes
            )
        except (DeliveryFailedException, SenderInactiveException):
            await self._pending_store.delete(row_id)
            await self._uow.commit()
            raise
        logger.info("Pending signup created for new email")
        return FlowResult(status="pending", message=PENDING_MESSAGE)

    async def verify(self, token: str) -> FlowResult:
        """Consume the token and create the user (role user, no forced password change).

        Raises:
            TokenExpiredException: Unknown, consumed or expired token.
            EmailAlreadyRegisteredException: A user with this email appeared meanwhile.
        """
        if not token or not token.strip():
            raise ValidationException("Token is required", field="token")
        pending = await self._pending_store.consume(token.strip())
        user = await self._user_repo.create_user(
            pending.email,
            pending.password_hash,
            role=UserRole.USER,
            must_change_password=False,
        )
        logger.info("Signup verified; created user %s", user.id)
        return FlowResult(status="verified", message=VERIFIED_MESSAGE)
