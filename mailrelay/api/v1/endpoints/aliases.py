"""Aliases API: alternate From addresses that send through a parent account."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.api.v1.dependencies import (
    CurrentPrincipal,
    get_alias_service,
    get_alias_service_for_write,
)
from mailrelay.application.services import AliasService
from mailrelay.core.limiter import limit_writes
from mailrelay.schemas.account import AliasCreateRequest, AliasResponse, AliasUpdate

router = APIRouter()


@router.get("", response_model=list[AliasResponse])
async def list_aliases(
    principal: CurrentPrincipal,
    service: Annotated[AliasService, Depends(get_alias_service)],
):
    """List aliases the caller may read, with their parent account."""
    return await service.list_aliases(principal)


@router.post("", response_model=AliasResponse, status_code=201)
@limit_writes
async def create_alias(
    request: Request,
    body: AliasCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[AliasService, Depends(get_alias_service_for_write)],
):
    """Create an alias (admin, or a dev on an account it owns)."""
    return await service.create_alias(
        principal,
        alias_email=body.alias_email,
        account_id=body.account_id,
        display_name=body.display_name,
        is_active=body.is_active,
        is_public=body.is_public,
        owner_id=body.owner_id,
    )


@router.patch("/{alias_id}", response_model=AliasResponse)
@limit_writes
async def update_alias(
    request: Request,
    alias_id: str,
    body: AliasUpdate,
    principal: CurrentPrincipal,
    service: Annotated[AliasService, Depends(get_alias_service_for_write)],
):
    """Partial update. accountId and ownerId require admin."""
    return await service.update_alias(principal, alias_id, body.model_dump(exclude_unset=True))


@router.delete("/{alias_id}", status_code=204)
@limit_writes
async def delete_alias(
    request: Request,
    alias_id: str,
    principal: CurrentPrincipal,
    service: Annotated[AliasService, Depends(get_alias_service_for_write)],
):
    """Delete an alias. Refused while it is the default sender."""
    await service.delete_alias(principal, alias_id)
