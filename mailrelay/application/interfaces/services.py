"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators the services call (DIP).
"""

from __future__ import annotations

from typing import Protocol

from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.domain.value_objects import SessionCredential


class IMailTransport(Protocol):
    """Protocol for the SMTP collaborator."""

    async def send(self, mail: OutgoingMail) -> None:
        """Deliver mail or raise with the server's error text."""


class ICaptchaVerifier(Protocol):
    """Protocol for captcha checks on public endpoints."""

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        """Raise ValidationException when the token is missing or rejected."""


class ICredentialEncryptor(Protocol):
    """Protocol for mailbox password encryption at rest."""

    def encrypt(self, password: str) -> str:
        """Return ciphertext safe for storage."""

    def decrypt(self, encrypted_str: str) -> str:
        """Return the plaintext password."""


class IAuthSecurity(Protocol):
    """Protocol for session tokens and password hashing."""

    def create_session_token(self, user_id: str, role: str, email: str) -> str:
        """Sign a session token for the user."""

    def decode_session_token(self, token: str) -> SessionCredential:
        """Return the session credential or raise ValueError."""

    def hash_password(self, password: str) -> str:
        """Return a salted one-way hash."""

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a stored hash."""


class IUnitOfWork(Protocol):
    """Commit/rollback boundary; AsyncSession satisfies it structurally."""

    async def commit(self) -> None:
        """Persist pending writes."""

    async def rollback(self) -> None:
        """Discard pending writes and end the transaction."""
