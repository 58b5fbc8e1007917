"""Settings API: the default sender used for system mail (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from mailrelay.api.v1.dependencies import (
    CurrentPrincipal,
    get_sender_service,
    get_sender_service_for_write,
)
from mailrelay.application.services import SenderService
from mailrelay.core.limiter import limit_writes
from mailrelay.schemas.sender import (
    DefaultSenderEnvelope,
    DefaultSenderResponse,
    DefaultSenderUpdate,
)

router = APIRouter()


@router.get("/default-sender", response_model=DefaultSenderEnvelope)
async def get_default_sender(
    principal: CurrentPrincipal,
    service: Annotated[SenderService, Depends(get_sender_service)],
):
    """Return the default sender; isActive reflects the current account/alias state."""
    summary = await service.get_default_sender(principal)
    return DefaultSenderEnvelope(
        default_sender=DefaultSenderResponse.model_validate(summary) if summary else None
    )


@router.put("/default-sender", response_model=DefaultSenderResponse)
@limit_writes
async def set_default_sender(
    request: Request,
    body: DefaultSenderUpdate,
    principal: CurrentPrincipal,
    service: Annotated[SenderService, Depends(get_sender_service_for_write)],
):
    """Point the default sender at an active account or alias.

    Send expectedVersion to fail with 409 if someone changed it meanwhile.
    """
    return await service.set_default_sender(
        principal, body.sender_type, body.sender_id, body.expected_version
    )


@router.delete("/default-sender", status_code=204)
@limit_writes
async def clear_default_sender(
    request: Request,
    principal: CurrentPrincipal,
    service: Annotated[SenderService, Depends(get_sender_service_for_write)],
    expected_version: Annotated[int | None, Query(alias="expectedVersion", ge=0)] = None,
):
    """Unset the default sender. System mail is disabled until a new one is set."""
    await service.clear_default_sender(principal, expected_version)
