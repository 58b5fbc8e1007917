"""Password reset flow. Requests always answer the same way (anti-enumeration)."""

from __future__ import annotations

import logging
from typing import Any

from mailrelay.application.dtos.user import FlowResult
from mailrelay.application.interfaces.services import ICaptchaVerifier, IUnitOfWork
from mailrelay.application.services.session_service import validate_password_strength
from mailrelay.application.services.system_mail_service import SystemMailService
from mailrelay.domain.exceptions import (
    DeliveryFailedException,
    SenderInactiveException,
    TokenExpiredException,
    ValidationException,
)
from mailrelay.domain.value_objects import normalize_email

logger = logging.getLogger(__name__)

REQUEST_MESSAGE = "If the email exists, a reset link was sent."
CONFIRM_MESSAGE = "Password has been reset. You can now sign in."


class PasswordResetService:
    """RequestReset(email) and ConfirmReset(token, new_password)."""

    def __init__(
        self,
        user_repo: Any,
        reset_store: Any,
        captcha: ICaptchaVerifier,
        uow: IUnitOfWork,
        system_mail: SystemMailService | None = None,
        *,
        min_password_length: int = 8,
        token_ttl_minutes: int = 30,
    ) -> None:
        self._user_repo = user_repo
        self._reset_store = reset_store
        self._captcha = captcha
        self._uow = uow
        self._system_mail = system_mail
        self._min_password_length = min_password_length
        self._token_ttl_minutes = token_ttl_minutes

    async def request_reset(
        self,
        email: str,
        captcha_token: str | None = None,
        remote_ip: str | None = None,
    ) -> FlowResult:
        """Mail a reset link if the user exists. Mail problems are logged, never surfaced."""
        await self._captcha.verify(captcha_token, remote_ip)
        result = FlowResult(status="ok", message=REQUEST_MESSAGE)
        normalized = normalize_email(email)
        if not normalized:
            return result
        user = await self._user_repo.get_by_email(normalized)
        if user is None:
            return result
        if self._system_mail is None:
            raise RuntimeError("PasswordResetService.request_reset requires a SystemMailService")
        try:
            await self._system_mail.ensure_available()
        except SenderInactiveException:
            logger.warning("Password reset for user %s skipped: system mail unavailable", user.id)
            return result
        user_id = user.id
        raw_token, _ = await self._reset_store.create(user_id)
        await self._uow.commit()
        try:
            await self._system_mail.send_password_reset(
                normalized, raw_token, self._token_ttl_minutes
            )
        except (DeliveryFailedException, SenderInactiveException) as e:
            logger.warning("Password reset mail for user %s not delivered: %s", user_id, e.message)
            return result
        logger.info("Password reset requested for user %s", user_id)
        return result

    async def confirm_reset(
        self,
        token: str,
        new_password: str,
        captcha_token: str | None = None,
        remote_ip: str | None = None,
    ) -> FlowResult:
        """Consume the token, set the new password, clear must_change_password.

        Raises:
            ValidationException: New password too short.
            TokenExpiredException: Unknown, consumed or expired token.
        """
        await self._captcha.verify(captcha_token, remote_ip)
        validate_password_strength(new_password, self._min_password_length, "newPassword")
        if not token or not token.strip():
            raise ValidationException("Token is required", field="token")
        user_id = await self._reset_store.consume(token.strip())
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise TokenExpiredException()
        await self._user_repo.update_password(user, new_password)
        await self._reset_store.delete_for_user(user_id)
        logger.info("Password reset confirmed for user %s", user_id)
        return FlowResult(status="success", message=CONFIRM_MESSAGE)
