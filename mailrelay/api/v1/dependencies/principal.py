"""Bearer authentication dependencies.

One HTTPBearer scheme accepts both session JWTs and API tokens; the
AuthenticationService decides which one it is.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mailrelay.api.v1.dependencies.auth import AuthSecurity, get_auth_security
from mailrelay.api.v1.dependencies.db import ReadSession
from mailrelay.application.services.authentication_service import AuthenticationService
from mailrelay.domain.exceptions import AuthenticationException, AuthorizationException
from mailrelay.domain.value_objects import Principal
from mailrelay.infrastructure.persistence.repositories import (
    ApiTokenRepository,
    UserRepository,
)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_principal(
    db: ReadSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> Principal:
    """Resolve Authorization: Bearer <token> into a Principal.

    Raises:
        AuthenticationException: Header missing, token unknown, revoked or expired.
    """
    if credentials is None or not credentials.credentials.strip():
        raise AuthenticationException()
    service = AuthenticationService(
        UserRepository(db), ApiTokenRepository(db), auth_security, db
    )
    return await service.authenticate(credentials.credentials.strip())


async def get_session_principal(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Principal that must have authenticated with a session token (not an API token)."""
    if not principal.is_session:
        raise AuthorizationException(message="This endpoint requires a session token")
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
SessionPrincipal = Annotated[Principal, Depends(get_session_principal)]
