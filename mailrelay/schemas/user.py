"""User API schemas."""

from datetime import datetime

from pydantic import EmailStr

from mailrelay.domain.enums import UserRole
from mailrelay.schemas.common import CamelModel


class UserCreateRequest(CamelModel):
    """Request body for POST /users (admin)."""

    email: EmailStr
    password: str
    role: UserRole = UserRole.USER
    must_change_password: bool = False


class UserUpdate(CamelModel):
    """Request body for PATCH /users/{id} (partial)."""

    password: str | None = None
    role: UserRole | None = None
    must_change_password: bool | None = None


class UserResponse(CamelModel):
    """User response (no password hash)."""

    id: str
    email: str
    role: UserRole
    must_change_password: bool
    created_at: datetime | None = None
