"""Send API: relay one message through a registered account or alias."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.api.v1.dependencies import CurrentPrincipal, get_dispatch_service
from mailrelay.application.services import DispatchService
from mailrelay.core.limiter import limit_writes
from mailrelay.schemas.common import StatusResponse
from mailrelay.schemas.sender import SendRequest

router = APIRouter()


@router.post("", response_model=StatusResponse)
@limit_writes
async def send_mail(
    request: Request,
    body: SendRequest,
    principal: CurrentPrincipal,
    service: Annotated[DispatchService, Depends(get_dispatch_service)],
):
    """Send as `from` (account or alias address). Accepts session or API tokens.

    SMTP failures return 502 with the server's message; nothing is retried.
    """
    await service.send(
        principal,
        from_address=body.from_,
        to=body.to,
        subject=body.subject,
        body=body.body,
        cc=body.cc,
        bcc=body.bcc,
        is_html=body.is_html,
    )
    return StatusResponse(status="sent", message="Email sent.")
