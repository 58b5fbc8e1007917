"""Account and alias API schemas. Mailbox passwords are write-only."""

from datetime import datetime

from pydantic import EmailStr, Field

from mailrelay.schemas.common import CamelModel


class AccountCreateRequest(CamelModel):
    """Request body for POST /accounts."""

    email: EmailStr
    display_name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, description="Mailbox password (encrypted at rest)")
    is_active: bool = True
    is_public: bool = True
    owner_id: str | None = None


class AccountUpdate(CamelModel):
    """Request body for PATCH /accounts/{id}. password and ownerId are admin-only."""

    display_name: str | None = Field(default=None, max_length=255)
    password: str | None = None
    is_active: bool | None = None
    is_public: bool | None = None
    owner_id: str | None = None


class AccountResponse(CamelModel):
    """Account response."""

    id: str
    email: str
    display_name: str
    is_active: bool
    is_public: bool
    owner_id: str | None = None
    created_at: datetime | None = None


class AliasCreateRequest(CamelModel):
    """Request body for POST /aliases."""

    alias_email: EmailStr
    account_id: str = Field(..., min_length=1)
    display_name: str | None = Field(default=None, max_length=255)
    is_active: bool = True
    is_public: bool = True
    owner_id: str | None = None


class AliasUpdate(CamelModel):
    """Request body for PATCH /aliases/{id}. accountId and ownerId are admin-only."""

    display_name: str | None = Field(default=None, max_length=255)
    account_id: str | None = None
    is_active: bool | None = None
    is_public: bool | None = None
    owner_id: str | None = None


class AliasResponse(CamelModel):
    """Alias response with the parent account's identity and state."""

    id: str
    alias_email: str
    display_name: str | None = None
    account_id: str
    account_email: str
    account_display_name: str
    account_is_active: bool
    is_active: bool
    is_public: bool
    owner_id: str | None = None
    created_at: datetime | None = None
