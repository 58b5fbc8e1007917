"""API token schemas. The secret appears only in the create response."""

from datetime import datetime

from pydantic import Field

from mailrelay.schemas.common import CamelModel

SAVE_TOKEN_MESSAGE = "Save this token now - you won't be able to see it again!"


class ApiTokenCreateRequest(CamelModel):
    """Request body for POST /api-tokens."""

    name: str | None = Field(default=None, max_length=100)


class ApiTokenResponse(CamelModel):
    """Token metadata."""

    id: str
    name: str | None = None
    created_at: datetime | None = None
    last_used_at: datetime | None = None


class ApiTokenCreatedResponse(ApiTokenResponse):
    """Create response: metadata plus the secret, shown once."""

    token: str
    message: str = SAVE_TOKEN_MESSAGE
