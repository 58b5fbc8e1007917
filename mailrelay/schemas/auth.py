"""Auth API schemas: login, password change, signup and reset flows.

Password length is enforced by the services (configurable minimum), so
bodies only require the fields to be present.
"""

from pydantic import EmailStr, Field

from mailrelay.domain.enums import UserRole
from mailrelay.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Request body for POST /auth/login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    turnstile_token: str | None = None


class LoginResponse(CamelModel):
    """Session token plus the fields the client routes on."""

    token: str
    id: str
    email: str
    role: UserRole
    must_change_password: bool


class ChangePasswordRequest(CamelModel):
    """Request body for POST /auth/change-password."""

    current_password: str
    new_password: str


class SignupRequest(CamelModel):
    """Request body for POST /auth/signup."""

    email: EmailStr
    password: str
    turnstile_token: str | None = None


class VerifyRequest(CamelModel):
    """Request body for POST /auth/signup/verify."""

    token: str = Field(..., min_length=1, description="Token from the verification link")


class PasswordResetRequest(CamelModel):
    """Request body for POST /auth/password-reset."""

    email: str
    turnstile_token: str | None = None


class PasswordResetConfirmRequest(CamelModel):
    """Request body for POST /auth/password-reset/confirm."""

    token: str = Field(..., min_length=1, description="Token from the reset link")
    new_password: str
    turnstile_token: str | None = None
