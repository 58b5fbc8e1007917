"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the current principal and
application services. Routes depend only on these, not on infra directly.
"""

from mailrelay.api.v1.dependencies.auth import (
    AuthSecurity,
    client_ip,
    get_auth_security,
    get_captcha_verifier,
    get_credential_encryptor,
    get_mail_transport,
)
from mailrelay.api.v1.dependencies.db import ReadSession, WriteSession
from mailrelay.api.v1.dependencies.principal import (
    CurrentPrincipal,
    SessionPrincipal,
    get_current_principal,
    get_session_principal,
)
from mailrelay.api.v1.dependencies.services import (
    build_sender_service,
    build_system_mail_service,
    get_account_service,
    get_account_service_for_write,
    get_alias_service,
    get_alias_service_for_write,
    get_api_token_service,
    get_api_token_service_for_write,
    get_dispatch_service,
    get_password_reset_confirm_service,
    get_password_reset_request_service,
    get_sender_service,
    get_sender_service_for_write,
    get_session_service,
    get_session_service_for_write,
    get_signup_service,
    get_signup_verify_service,
    get_user_admin_service,
    get_user_admin_service_for_write,
)

__all__ = [
    "AuthSecurity",
    "CurrentPrincipal",
    "ReadSession",
    "SessionPrincipal",
    "WriteSession",
    "build_sender_service",
    "build_system_mail_service",
    "client_ip",
    "get_account_service",
    "get_account_service_for_write",
    "get_alias_service",
    "get_alias_service_for_write",
    "get_api_token_service",
    "get_api_token_service_for_write",
    "get_auth_security",
    "get_captcha_verifier",
    "get_credential_encryptor",
    "get_current_principal",
    "get_dispatch_service",
    "get_mail_transport",
    "get_password_reset_confirm_service",
    "get_password_reset_request_service",
    "get_sender_service",
    "get_sender_service_for_write",
    "get_session_principal",
    "get_session_service",
    "get_session_service_for_write",
    "get_signup_service",
    "get_signup_verify_service",
    "get_user_admin_service",
    "get_user_admin_service_for_write",
]
