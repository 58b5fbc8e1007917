"""Auth API: login, password change, current user, signup and password reset.

Uses only injected dependencies; services raise domain exceptions that
the central handlers turn into status codes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.api.v1.dependencies import (
    SessionPrincipal,
    client_ip,
    get_captcha_verifier,
    get_password_reset_confirm_service,
    get_password_reset_request_service,
    get_session_service,
    get_session_service_for_write,
    get_signup_service,
    get_signup_verify_service,
)
from mailrelay.application.interfaces.services import ICaptchaVerifier
from mailrelay.application.services import (
    PasswordResetService,
    SessionService,
    SignupService,
)
from mailrelay.core.limiter import limit_auth, limit_writes
from mailrelay.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    SignupRequest,
    VerifyRequest,
)
from mailrelay.schemas.common import StatusResponse
from mailrelay.schemas.user import UserResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    service: Annotated[SessionService, Depends(get_session_service)],
    captcha: Annotated[ICaptchaVerifier, Depends(get_captcha_verifier)],
):
    """Exchange email and password for a 12-hour session token.

    Unknown email and wrong password return the same 401.
    """
    await captcha.verify(body.turnstile_token, client_ip(request))
    return await service.login(body.email, body.password)


@router.post("/change-password", response_model=StatusResponse)
@limit_writes
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    principal: SessionPrincipal,
    service: Annotated[SessionService, Depends(get_session_service_for_write)],
):
    """Change the caller's password. Allowed while a password change is pending."""
    await service.change_password(principal, body.current_password, body.new_password)
    return StatusResponse(status="success", message="Password updated.")


@router.get("/me", response_model=UserResponse)
async def get_me(
    principal: SessionPrincipal,
    service: Annotated[SessionService, Depends(get_session_service)],
):
    """Return the current user (including mustChangePassword)."""
    return await service.me(principal)


@router.post("/signup", response_model=StatusResponse)
@limit_auth
async def signup(
    request: Request,
    body: SignupRequest,
    service: Annotated[SignupService, Depends(get_signup_service)],
):
    """Start self-service signup; a verification link is mailed through the default sender."""
    return await service.signup(
        body.email, body.password, body.turnstile_token, client_ip(request)
    )


@router.post("/signup/verify", response_model=StatusResponse)
@limit_auth
async def verify_signup(
    request: Request,
    body: VerifyRequest,
    service: Annotated[SignupService, Depends(get_signup_verify_service)],
):
    """Consume a verification token and create the user."""
    return await service.verify(body.token)


@router.post("/password-reset", response_model=StatusResponse)
@limit_auth
async def request_password_reset(
    request: Request,
    body: PasswordResetRequest,
    service: Annotated[PasswordResetService, Depends(get_password_reset_request_service)],
):
    """Request a reset link. The answer is identical whether or not the email exists."""
    return await service.request_reset(body.email, body.turnstile_token, client_ip(request))


@router.post("/password-reset/confirm", response_model=StatusResponse)
@limit_auth
async def confirm_password_reset(
    request: Request,
    body: PasswordResetConfirmRequest,
    service: Annotated[PasswordResetService, Depends(get_password_reset_confirm_service)],
):
    """Set a new password with a reset token. Each token works once."""
    return await service.confirm_reset(
        body.token, body.new_password, body.turnstile_token, client_ip(request)
    )
