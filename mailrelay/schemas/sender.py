"""Default sender and send API schemas."""

from pydantic import Field

from mailrelay.domain.enums import SenderType
from mailrelay.schemas.common import CamelModel


class DefaultSenderUpdate(CamelModel):
    """Request body for PUT /settings/default-sender."""

    sender_type: SenderType
    sender_id: str = Field(..., min_length=1)
    expected_version: int | None = Field(
        default=None, ge=0, description="Version last read; a mismatch returns 409"
    )


class DefaultSenderResponse(CamelModel):
    """Current default sender; isActive is recomputed on each read."""

    sender_type: SenderType
    sender_id: str
    email: str
    display_label: str
    via_display: str | None = None
    is_active: bool
    version: int


class DefaultSenderEnvelope(CamelModel):
    """GET body: defaultSender is null when unset."""

    default_sender: DefaultSenderResponse | None = None


class SendRequest(CamelModel):
    """Request body for POST /send. to/cc/bcc are comma-separated lists."""

    from_: str = Field(..., alias="from")
    to: str
    subject: str = ""
    body: str = ""
    cc: str | None = None
    bcc: str | None = None
    is_html: bool = False
