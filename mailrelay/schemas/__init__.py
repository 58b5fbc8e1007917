"""Pydantic request/response schemas for the API."""

from mailrelay.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdate,
    AliasCreateRequest,
    AliasResponse,
    AliasUpdate,
)
from mailrelay.schemas.api_token import (
    ApiTokenCreatedResponse,
    ApiTokenCreateRequest,
    ApiTokenResponse,
)
from mailrelay.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    SignupRequest,
    VerifyRequest,
)
from mailrelay.schemas.common import CamelModel, StatusResponse
from mailrelay.schemas.health import HealthResponse
from mailrelay.schemas.sender import (
    DefaultSenderEnvelope,
    DefaultSenderResponse,
    DefaultSenderUpdate,
    SendRequest,
)
from mailrelay.schemas.user import UserCreateRequest, UserResponse, UserUpdate

__all__ = [
    "AccountCreateRequest",
    "AccountResponse",
    "AccountUpdate",
    "AliasCreateRequest",
    "AliasResponse",
    "AliasUpdate",
    "ApiTokenCreateRequest",
    "ApiTokenCreatedResponse",
    "ApiTokenResponse",
    "CamelModel",
    "ChangePasswordRequest",
    "DefaultSenderEnvelope",
    "DefaultSenderResponse",
    "DefaultSenderUpdate",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PasswordResetConfirmRequest",
    "PasswordResetRequest",
    "SendRequest",
    "SignupRequest",
    "StatusResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdate",
]
