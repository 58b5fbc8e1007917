"""DTOs for account and alias management (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AccountResult:
    """Account read-model. The mailbox password never leaves the service layer."""

    id: str
    email: str
    display_name: str
    is_active: bool
    is_public: bool
    owner_id: str | None
    created_at: datetime | None = None


@dataclass(frozen=True)
class AliasResult:
    """Alias read-model with the parent account's identity and state."""

    id: str
    alias_email: str
    display_name: str | None
    account_id: str
    account_email: str
    account_display_name: str
    account_is_active: bool
    is_active: bool
    is_public: bool
    owner_id: str | None
    created_at: datetime | None = None
