"""Email dispatch gateway: authorize, resolve the sender, hand off to SMTP."""

from __future__ import annotations

import logging

from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.application.interfaces.services import IMailTransport, IUnitOfWork
from mailrelay.application.services.authorization_service import AuthorizationService
from mailrelay.application.services.delivery import deliver_with_timeout
from mailrelay.application.services.sender_service import SenderService
from mailrelay.domain.enums import Action
from mailrelay.domain.exceptions import AuthorizationException, ValidationException
from mailrelay.domain.value_objects import Principal, parse_address_list

logger = logging.getLogger(__name__)


class DispatchService:
    """User-initiated sends. admin principals manage the relay and never send through it."""

    def __init__(
        self,
        authz: AuthorizationService,
        sender_service: SenderService,
        transport: IMailTransport,
        uow: IUnitOfWork,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._authz = authz
        self._sender_service = sender_service
        self._transport = transport
        self._uow = uow
        self._timeout_seconds = timeout_seconds

    async def send(
        self,
        principal: Principal,
        from_address: str,
        to: str,
        subject: str,
        body: str,
        cc: str | None = None,
        bcc: str | None = None,
        is_html: bool = False,
    ) -> None:
        """Send one message.

        Raises:
            AuthorizationException: admin principal, or the sender is not readable.
            PasswordChangeRequiredException: Session must change its password first.
            ValidationException: Blank From or no To recipients.
            SenderNotFoundException: From does not resolve to an active identity.
            DeliveryFailedException: SMTP failure or timeout, text passed through.
        """
        if principal.is_admin:
            raise AuthorizationException(
                resource="send", message="Admin accounts cannot send mail through the relay"
            )
        self._authz.ensure_password_updated(principal)
        if not from_address or not from_address.strip():
            raise ValidationException("Sender address is required", field="from")
        to_list = parse_address_list(to)
        if not to_list:
            raise ValidationException("At least one recipient is required", field="to")

        sender = await self._sender_service.resolve_sender(from_address)
        self._authz.require(principal, Action.READ, sender.resource_ref())

        mail = OutgoingMail(
            header_from=sender.header_from,
            display_name=sender.display_name,
            auth_email=sender.auth_email,
            auth_password=sender.auth_password,
            to=to_list,
            cc=parse_address_list(cc),
            bcc=parse_address_list(bcc),
            subject=subject,
            body=body,
            is_html=is_html,
        )
        # End the read transaction before network I/O.
        await self._uow.rollback()
        await deliver_with_timeout(self._transport, mail, self._timeout_seconds)
        logger.info(
            "User %s sent mail from %s to %d recipient(s)",
            principal.user_id,
            sender.header_from,
            len(mail.recipients),
        )
