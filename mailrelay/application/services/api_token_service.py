"""API token service: create (secret shown once), list metadata, revoke."""

from __future__ import annotations

import logging
from typing import Any

from mailrelay.application.dtos.api_token import ApiTokenResult, CreatedApiToken
from mailrelay.application.services.authorization_service import AuthorizationService
from mailrelay.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
)
from mailrelay.domain.value_objects import Principal
from mailrelay.shared.utils.generators import generate_api_token_secret

logger = logging.getLogger(__name__)

TOKEN_NAME_MAX_LENGTH = 100


def _token_to_result(t: Any) -> ApiTokenResult:
    return ApiTokenResult(
        id=t.id,
        name=t.name,
        created_at=t.created_at,
        last_used_at=t.last_used_at,
    )


class ApiTokenService:
    """Manage the caller's API tokens. Requires a session credential.

    Tokens never expire and are exempt from the password-change gate once
    issued, but a session with must_change_password can neither mint, list
    nor revoke them until the password is changed.
    """

    def __init__(self, api_token_repo: Any, authz: AuthorizationService) -> None:
        self._api_token_repo = api_token_repo
        self._authz = authz

    def _require_session(self, principal: Principal) -> None:
        if not principal.is_session:
            raise AuthorizationException(
                resource="api_token",
                message="API tokens can only be managed with a session token",
            )
        self._authz.ensure_password_updated(principal)

    async def create_token(self, principal: Principal, name: str | None) -> CreatedApiToken:
        self._require_session(principal)
        clean_name = name.strip()[:TOKEN_NAME_MAX_LENGTH] if name and name.strip() else None
        secret = generate_api_token_secret()
        token = await self._api_token_repo.create_token(principal.user_id, secret, clean_name)
        logger.info("User %s created API token %s", principal.user_id, token.id)
        return CreatedApiToken(token=secret, metadata=_token_to_result(token))

    async def list_tokens(self, principal: Principal) -> list[ApiTokenResult]:
        self._require_session(principal)
        tokens = await self._api_token_repo.list_for_user(principal.user_id)
        return [_token_to_result(t) for t in tokens]

    async def delete_token(self, principal: Principal, token_id: str) -> None:
        """Revoke one of the caller's tokens; absent or foreign ids raise NotFound."""
        self._require_session(principal)
        deleted = await self._api_token_repo.delete_for_user(token_id, principal.user_id)
        if not deleted:
            raise ResourceNotFoundException("api_token", token_id)
        logger.info("User %s deleted API token %s", principal.user_id, token_id)
