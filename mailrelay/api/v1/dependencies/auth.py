"""Auth, crypto and outbound collaborators (composition root)."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from mailrelay.core.config import get_settings
from mailrelay.domain.value_objects import SessionCredential
from mailrelay.infrastructure.external.captcha.turnstile import TurnstileVerifier
from mailrelay.infrastructure.external.email.encryption import CredentialEncryptor
from mailrelay.infrastructure.external.smtp.transport import SmtpMailTransport
from mailrelay.infrastructure.security.jwt import create_session_token, decode_session_token
from mailrelay.infrastructure.security.password import get_password_hash, verify_password


class AuthSecurity:
    """Token and password hashing provided via DI (no direct infra imports in services)."""

    def create_session_token(self, user_id: str, role: str, email: str) -> str:
        return create_session_token(user_id, role, email)

    def decode_session_token(self, token: str) -> SessionCredential:
        return decode_session_token(token)

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        return verify_password(password, password_hash)


def get_auth_security() -> AuthSecurity:
    """Session token creation and password hashing (composition root)."""
    return AuthSecurity()


@lru_cache
def get_credential_encryptor() -> CredentialEncryptor:
    """Mailbox password encryptor. Cached: key derivation runs PBKDF2 once per process."""
    return CredentialEncryptor()


def get_mail_transport(request: Request) -> SmtpMailTransport:
    """SMTP collaborator built in lifespan; falls back to settings when lifespan did not run."""
    transport = getattr(request.app.state, "mail_transport", None)
    if transport is None:
        transport = SmtpMailTransport.from_settings(get_settings())
    return transport


def get_captcha_verifier(request: Request) -> TurnstileVerifier:
    """Turnstile verifier over the shared HTTP client (no-op when no secret is set)."""
    http_client = getattr(request.app.state, "http_client", None)
    return TurnstileVerifier.from_settings(get_settings(), http_client)


def client_ip(request: Request) -> str | None:
    """Remote address forwarded to the captcha verifier."""
    return request.client.host if request.client else None
