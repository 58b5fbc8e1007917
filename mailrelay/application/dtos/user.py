"""DTOs for user and session use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from mailrelay.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model. No password hash."""

    id: str
    email: str
    role: UserRole
    must_change_password: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class LoginResult:
    """Session token plus the user fields the client needs to route."""

    token: str
    id: str
    email: str
    role: UserRole
    must_change_password: bool


@dataclass(frozen=True)
class FlowResult:
    """Outcome of a signup or password-reset step."""

    status: str
    message: str
