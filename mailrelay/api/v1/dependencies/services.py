"""Application service dependencies (composition root).

Routes depend only on these factories; repositories, stores and
collaborators are wired here from settings.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.api.v1.dependencies.auth import (
    AuthSecurity,
    get_auth_security,
    get_captcha_verifier,
    get_credential_encryptor,
    get_mail_transport,
)
from mailrelay.api.v1.dependencies.db import ReadSession, WriteSession
from mailrelay.application.interfaces.services import (
    ICaptchaVerifier,
    ICredentialEncryptor,
    IMailTransport,
)
from mailrelay.application.services import (
    AccountService,
    AliasService,
    ApiTokenService,
    AuthorizationService,
    DispatchService,
    PasswordResetService,
    SenderService,
    SessionService,
    SignupService,
    SystemMailService,
    UserAdminService,
)
from mailrelay.core.config import get_settings
from mailrelay.infrastructure.persistence.repositories import (
    AccountRepository,
    AliasRepository,
    ApiTokenRepository,
    DefaultSenderRepository,
    PasswordResetTokenStore,
    PendingUserStore,
    UserRepository,
)

Encryptor = Annotated[ICredentialEncryptor, Depends(get_credential_encryptor)]
Transport = Annotated[IMailTransport, Depends(get_mail_transport)]
Captcha = Annotated[ICaptchaVerifier, Depends(get_captcha_verifier)]
Security = Annotated[AuthSecurity, Depends(get_auth_security)]


def build_sender_service(db: AsyncSession, encryptor: ICredentialEncryptor) -> SenderService:
    return SenderService(
        AccountRepository(db),
        AliasRepository(db),
        DefaultSenderRepository(db),
        encryptor,
        AuthorizationService(),
    )


def build_system_mail_service(
    db: AsyncSession, encryptor: ICredentialEncryptor, transport: IMailTransport
) -> SystemMailService:
    settings = get_settings()
    return SystemMailService(
        build_sender_service(db, encryptor),
        transport,
        db,
        app_name=settings.app_name,
        base_url=settings.app_base_url,
        timeout_seconds=settings.smtp_timeout_seconds,
    )


def _session_service(db: AsyncSession, auth_security: AuthSecurity) -> SessionService:
    return SessionService(
        UserRepository(db), auth_security, get_settings().min_password_length
    )


async def get_session_service(db: ReadSession, auth_security: Security) -> SessionService:
    return _session_service(db, auth_security)


async def get_session_service_for_write(
    db: WriteSession, auth_security: Security
) -> SessionService:
    return _session_service(db, auth_security)


async def get_api_token_service(db: ReadSession) -> ApiTokenService:
    return ApiTokenService(ApiTokenRepository(db), AuthorizationService())


async def get_api_token_service_for_write(db: WriteSession) -> ApiTokenService:
    return ApiTokenService(ApiTokenRepository(db), AuthorizationService())


async def get_signup_service(
    db: ReadSession,
    auth_security: Security,
    captcha: Captcha,
    encryptor: Encryptor,
    transport: Transport,
) -> SignupService:
    """Signup commits the pending row itself before mailing, so it runs on a plain session."""
    settings = get_settings()
    return SignupService(
        UserRepository(db),
        PendingUserStore(db, settings.signup_token_ttl_minutes),
        auth_security,
        captcha,
        db,
        build_system_mail_service(db, encryptor, transport),
        min_password_length=settings.min_password_length,
        token_ttl_minutes=settings.signup_token_ttl_minutes,
        conceal_existing_email=settings.signup_conceal_existing_email,
    )


async def get_signup_verify_service(
    db: WriteSession, auth_security: Security, captcha: Captcha
) -> SignupService:
    settings = get_settings()
    return SignupService(
        UserRepository(db),
        PendingUserStore(db, settings.signup_token_ttl_minutes),
        auth_security,
        captcha,
        db,
        min_password_length=settings.min_password_length,
        token_ttl_minutes=settings.signup_token_ttl_minutes,
    )


async def get_password_reset_request_service(
    db: ReadSession, captcha: Captcha, encryptor: Encryptor, transport: Transport
) -> PasswordResetService:
    """Reset requests commit the token before mailing, so they run on a plain session."""
    settings = get_settings()
    return PasswordResetService(
        UserRepository(db),
        PasswordResetTokenStore(db, settings.password_reset_token_ttl_minutes),
        captcha,
        db,
        build_system_mail_service(db, encryptor, transport),
        min_password_length=settings.min_password_length,
        token_ttl_minutes=settings.password_reset_token_ttl_minutes,
    )


async def get_password_reset_confirm_service(
    db: WriteSession, captcha: Captcha
) -> PasswordResetService:
    settings = get_settings()
    return PasswordResetService(
        UserRepository(db),
        PasswordResetTokenStore(db, settings.password_reset_token_ttl_minutes),
        captcha,
        db,
        min_password_length=settings.min_password_length,
        token_ttl_minutes=settings.password_reset_token_ttl_minutes,
    )


async def get_sender_service(db: ReadSession, encryptor: Encryptor) -> SenderService:
    return build_sender_service(db, encryptor)


async def get_sender_service_for_write(db: WriteSession, encryptor: Encryptor) -> SenderService:
    return build_sender_service(db, encryptor)


def _account_service(db: AsyncSession, encryptor: ICredentialEncryptor) -> AccountService:
    return AccountService(
        AccountRepository(db),
        AliasRepository(db),
        UserRepository(db),
        build_sender_service(db, encryptor),
        encryptor,
        AuthorizationService(),
    )


async def get_account_service(db: ReadSession, encryptor: Encryptor) -> AccountService:
    return _account_service(db, encryptor)


async def get_account_service_for_write(
    db: WriteSession, encryptor: Encryptor
) -> AccountService:
    return _account_service(db, encryptor)


def _alias_service(db: AsyncSession, encryptor: ICredentialEncryptor) -> AliasService:
    return AliasService(
        AliasRepository(db),
        AccountRepository(db),
        UserRepository(db),
        build_sender_service(db, encryptor),
        AuthorizationService(),
    )


async def get_alias_service(db: ReadSession, encryptor: Encryptor) -> AliasService:
    return _alias_service(db, encryptor)


async def get_alias_service_for_write(db: WriteSession, encryptor: Encryptor) -> AliasService:
    return _alias_service(db, encryptor)


def _user_admin_service(db: AsyncSession, auth_security: AuthSecurity) -> UserAdminService:
    return UserAdminService(
        UserRepository(db),
        ApiTokenRepository(db),
        auth_security,
        AuthorizationService(),
        get_settings().min_password_length,
    )


async def get_user_admin_service(db: ReadSession, auth_security: Security) -> UserAdminService:
    return _user_admin_service(db, auth_security)


async def get_user_admin_service_for_write(
    db: WriteSession, auth_security: Security
) -> UserAdminService:
    return _user_admin_service(db, auth_security)


async def get_dispatch_service(
    db: ReadSession, encryptor: Encryptor, transport: Transport
) -> DispatchService:
    """Dispatch shares the principal's read session and ends it before SMTP runs."""
    return DispatchService(
        AuthorizationService(),
        build_sender_service(db, encryptor),
        transport,
        db,
        get_settings().smtp_timeout_seconds,
    )
