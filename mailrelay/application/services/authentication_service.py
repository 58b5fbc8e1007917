"""Authentication: turn a bearer string into a Principal.

The bearer is tried as an API token first (digest lookup), then as a
session JWT. Role and must_change_password are read from the user row.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from mailrelay.application.interfaces.services import IAuthSecurity, IUnitOfWork
from mailrelay.domain.enums import UserRole
from mailrelay.domain.exceptions import AuthenticationException
from mailrelay.domain.value_objects import (
    ApiTokenCredential,
    Credential,
    Principal,
)

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Resolve bearer credentials into a single Principal shape."""

    def __init__(
        self,
        user_repo: Any,
        api_token_repo: Any,
        auth_security: IAuthSecurity,
        uow: IUnitOfWork,
    ) -> None:
        self._user_repo = user_repo
        self._api_token_repo = api_token_repo
        self._auth_security = auth_security
        self._uow = uow

    async def identify(self, bearer: str) -> Credential:
        """Classify the bearer string.

        Raises:
            AuthenticationException: Neither a known API token nor a valid session token.
        """
        api_token = await self._api_token_repo.get_by_secret(bearer)
        if api_token is not None:
            return ApiTokenCredential(user_id=api_token.user_id, token_id=api_token.id)
        try:
            return self._auth_security.decode_session_token(bearer)
        except ValueError as e:
            raise AuthenticationException("Invalid or expired token") from e

    async def authenticate(self, bearer: str) -> Principal:
        """Return the Principal for bearer; API-token use updates last_used_at."""
        credential = await self.identify(bearer)
        user = await self._user_repo.get_by_id(credential.user_id)
        if user is None:
            raise AuthenticationException("Invalid or expired token")
        if isinstance(credential, ApiTokenCredential):
            await self._touch(credential.token_id)
        return Principal(
            user_id=user.id,
            email=user.email,
            role=UserRole(user.role),
            must_change_password=user.must_change_password,
            credential_kind=credential.kind,
        )

    async def _touch(self, token_id: str) -> None:
        """Best-effort last_used_at update; failures are logged, not raised."""
        try:
            await self._api_token_repo.touch_last_used(token_id)
            await self._uow.commit()
        except SQLAlchemyError as e:
            logger.warning("Could not update last_used_at for API token %s: %s", token_id, e)
            await self._uow.rollback()
