"""Accounts API: Microsoft 365 mailboxes the relay can authenticate as."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.api.v1.dependencies import (
    CurrentPrincipal,
    get_account_service,
    get_account_service_for_write,
)
from mailrelay.application.services import AccountService
from mailrelay.core.limiter import limit_writes
from mailrelay.schemas.account import AccountCreateRequest, AccountResponse, AccountUpdate

router = APIRouter()


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    principal: CurrentPrincipal,
    service: Annotated[AccountService, Depends(get_account_service)],
):
    """List accounts the caller may read (owned or public; admin sees all)."""
    return await service.list_accounts(principal)


@router.post("", response_model=AccountResponse, status_code=201)
@limit_writes
async def create_account(
    request: Request,
    body: AccountCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Create an account (admin or dev). A dev becomes the owner."""
    return await service.create_account(
        principal,
        email=body.email,
        display_name=body.display_name,
        password=body.password,
        is_active=body.is_active,
        is_public=body.is_public,
        owner_id=body.owner_id,
    )


@router.patch("/{account_id}", response_model=AccountResponse)
@limit_writes
async def update_account(
    request: Request,
    account_id: str,
    body: AccountUpdate,
    principal: CurrentPrincipal,
    service: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Partial update. password and ownerId require admin."""
    return await service.update_account(
        principal, account_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{account_id}", status_code=204)
@limit_writes
async def delete_account(
    request: Request,
    account_id: str,
    principal: CurrentPrincipal,
    service: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Delete an account and its aliases. Refused while it is the default sender."""
    await service.delete_account(principal, account_id)
