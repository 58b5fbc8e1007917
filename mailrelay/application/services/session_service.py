"""Session service: login, change password, current user."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mailrelay.application.dtos.user import LoginResult, UserResult
from mailrelay.application.interfaces.services import IAuthSecurity
from mailrelay.domain.enums import UserRole
from mailrelay.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidCredentialsException,
    ValidationException,
)
from mailrelay.domain.value_objects import Principal, normalize_email

logger = logging.getLogger(__name__)


def user_to_result(u: Any) -> UserResult:
    """Build UserResult from a user row."""
    return UserResult(
        id=u.id,
        email=u.email,
        role=UserRole(u.role),
        must_change_password=u.must_change_password,
        created_at=u.created_at,
    )


def validate_password_strength(password: str, min_length: int, field: str = "password") -> None:
    """Raise ValidationException when password is shorter than min_length."""
    if len(password) < min_length:
        raise ValidationException(
            f"Password must be at least {min_length} characters", field=field
        )


class SessionService:
    """Issue 12-hour session tokens and manage the caller's own password."""

    def __init__(
        self,
        user_repo: Any,
        auth_security: IAuthSecurity,
        min_password_length: int = 8,
    ) -> None:
        self._user_repo = user_repo
        self._auth_security = auth_security
        self._min_password_length = min_password_length

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate and issue a session token.

        Raises:
            InvalidCredentialsException: Unknown email or wrong password (same message).
        """
        user = await self._user_repo.authenticate(normalize_email(email), password)
        if not user:
            raise InvalidCredentialsException()
        token = self._auth_security.create_session_token(user.id, user.role, user.email)
        logger.info("User %s logged in", user.id)
        return LoginResult(
            token=token,
            id=user.id,
            email=user.email,
            role=UserRole(user.role),
            must_change_password=user.must_change_password,
        )

    async def change_password(
        self, principal: Principal, current_password: str, new_password: str
    ) -> None:
        """Re-verify current password, store the new one, clear must_change_password.

        Raises:
            AuthorizationException: Caller authenticated with an API token.
            ValidationException: New password too short.
            InvalidCredentialsException: current_password does not match.
        """
        if not principal.is_session:
            raise AuthorizationException(
                message="Password changes require a session token"
            )
        validate_password_strength(new_password, self._min_password_length, "newPassword")
        user = await self._user_repo.get_by_id(principal.user_id)
        if not user:
            raise AuthenticationException()
        matches = await asyncio.to_thread(
            self._auth_security.verify_password, current_password, user.password_hash
        )
        if not matches:
            raise InvalidCredentialsException("Current password is incorrect")
        await self._user_repo.update_password(user, new_password)
        logger.info("User %s changed password", user.id)

    async def me(self, principal: Principal) -> UserResult:
        """Return the caller's user record (allowed while a password change is pending)."""
        user = await self._user_repo.get_by_id(principal.user_id)
        if not user:
            raise AuthenticationException()
        return user_to_result(user)
