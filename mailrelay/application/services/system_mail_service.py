"""System mail: verification and password reset messages via the default sender."""

from __future__ import annotations

from urllib.parse import quote

from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.application.dtos.sender import ResolvedSender
from mailrelay.application.interfaces.services import IMailTransport, IUnitOfWork
from mailrelay.application.services.delivery import deliver_with_timeout
from mailrelay.application.services.sender_service import SenderService
from mailrelay.infrastructure.external.email.templates import build_system_email_html


class SystemMailService:
    """Compose and send system mail. The default sender is re-resolved per message."""

    def __init__(
        self,
        sender_service: SenderService,
        transport: IMailTransport,
        uow: IUnitOfWork,
        app_name: str,
        base_url: str,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._sender_service = sender_service
        self._transport = transport
        self._uow = uow
        self._app_name = app_name
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    async def ensure_available(self) -> ResolvedSender:
        """Raise SenderInactiveException when system mail is disabled."""
        return await self._sender_service.resolve_system_sender()

    def link(self, path: str, token: str) -> str:
        return f"{self._base_url}{path}?token={quote(token, safe='')}"

    async def send_verification(self, to_email: str, token: str, ttl_minutes: int) -> None:
        url = self.link("/signup/verify", token)
        html = build_system_email_html(
            self._app_name,
            "Verify your email",
            [
                "Thanks for signing up. Confirm your email address to activate your account.",
                f"This link expires in {ttl_minutes} minutes.",
            ],
            "Verify email",
            url,
        )
        await self._send(to_email, f"Verify your {self._app_name} account", html)

    async def send_password_reset(self, to_email: str, token: str, ttl_minutes: int) -> None:
        url = self.link("/reset-password", token)
        html = build_system_email_html(
            self._app_name,
            "Reset your password",
            [
                "We received a request to reset your password.",
                f"This link expires in {ttl_minutes} minutes. If you did not ask for it, ignore this email.",
            ],
            "Reset password",
            url,
        )
        await self._send(to_email, f"Reset your {self._app_name} password", html)

    async def _send(self, to_email: str, subject: str, html: str) -> None:
        sender = await self._sender_service.resolve_system_sender()
        mail = OutgoingMail(
            header_from=sender.header_from,
            display_name=sender.display_name or self._app_name,
            auth_email=sender.auth_email,
            auth_password=sender.auth_password,
            to=[to_email],
            subject=subject,
            body=html,
            is_html=True,
        )
        # End the read transaction before network I/O.
        await self._uow.rollback()
        await deliver_with_timeout(self._transport, mail, self._timeout_seconds)
