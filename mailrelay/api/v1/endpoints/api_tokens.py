"""API tokens: long-lived bearer secrets for programmatic sending.

Managing tokens requires a session token; an API token cannot mint or
revoke tokens.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.api.v1.dependencies import (
    SessionPrincipal,
    get_api_token_service,
    get_api_token_service_for_write,
)
from mailrelay.application.services import ApiTokenService
from mailrelay.core.limiter import limit_writes
from mailrelay.schemas.api_token import (
    ApiTokenCreatedResponse,
    ApiTokenCreateRequest,
    ApiTokenResponse,
)

router = APIRouter()


@router.get("", response_model=list[ApiTokenResponse])
async def list_api_tokens(
    principal: SessionPrincipal,
    service: Annotated[ApiTokenService, Depends(get_api_token_service)],
):
    """List the caller's tokens (metadata only, newest first)."""
    return await service.list_tokens(principal)


@router.post("", response_model=ApiTokenCreatedResponse, status_code=201)
@limit_writes
async def create_api_token(
    request: Request,
    body: ApiTokenCreateRequest,
    principal: SessionPrincipal,
    service: Annotated[ApiTokenService, Depends(get_api_token_service_for_write)],
):
    """Create a token. The secret is in this response only."""
    created = await service.create_token(principal, body.name)
    meta = created.metadata
    return ApiTokenCreatedResponse(
        token=created.token,
        id=meta.id,
        name=meta.name,
        created_at=meta.created_at,
        last_used_at=meta.last_used_at,
    )


@router.delete("/{token_id}", status_code=204)
@limit_writes
async def delete_api_token(
    request: Request,
    token_id: str,
    principal: SessionPrincipal,
    service: Annotated[ApiTokenService, Depends(get_api_token_service_for_write)],
):
    """Revoke one of the caller's tokens. Unknown or foreign ids return 404."""
    await service.delete_token(principal, token_id)
