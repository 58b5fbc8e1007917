"""DTOs for API token management."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ApiTokenResult:
    """Token metadata. Never carries the secret."""

    id: str
    name: str | None
    created_at: datetime | None
    last_used_at: datetime | None


@dataclass(frozen=True)
class CreatedApiToken:
    """Returned once at creation; the secret cannot be recovered later."""

    token: str
    metadata: ApiTokenResult
