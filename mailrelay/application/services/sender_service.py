"""Sender resolution and the default sender setting.

An address resolves to an active Account, or to an active Alias whose
parent Account is also active. The default sender is re-checked on every
read and every system send; the stored setting is never trusted alone.
"""

from __future__ import annotations

import logging
from typing import Any

from mailrelay.application.dtos.sender import DefaultSenderSummary, ResolvedSender
from mailrelay.application.interfaces.services import ICredentialEncryptor
from mailrelay.application.services.authorization_service import AuthorizationService
from mailrelay.domain.enums import Action, ResourceType, SenderType
from mailrelay.domain.exceptions import (
    DefaultSenderInUseException,
    SenderInactiveException,
    SenderNotFoundException,
    ValidationException,
)
from mailrelay.domain.value_objects import Principal, ResourceRef, normalize_email

logger = logging.getLogger(__name__)

_DEFAULT_SENDER_REF = ResourceRef(ResourceType.DEFAULT_SENDER)


class SenderService:
    """ResolveSender, Get/Set/Clear default sender, system sender lookup."""

    def __init__(
        self,
        account_repo: Any,
        alias_repo: Any,
        default_sender_repo: Any,
        encryptor: ICredentialEncryptor,
        authz: AuthorizationService | None = None,
    ) -> None:
        self._account_repo = account_repo
        self._alias_repo = alias_repo
        self._default_sender_repo = default_sender_repo
        self._encryptor = encryptor
        self._authz = authz or AuthorizationService()

    async def resolve_sender(self, address: str) -> ResolvedSender:
        """Resolve a From address; Account first, then Alias.

        Raises:
            SenderNotFoundException: No match, or the match (or an alias's account) is inactive.
        """
        email = normalize_email(address)
        if not email:
            raise SenderNotFoundException(address)
        account = await self._account_repo.get_active_by_email(email)
        if account is not None:
            return self._from_account(account)
        pair = await self._alias_repo.get_active_with_account_by_email(email)
        if pair is not None:
            return self._from_alias(*pair)
        raise SenderNotFoundException(address)

    async def resolve_system_sender(self) -> ResolvedSender:
        """Return the default sender if it is set and currently active.

        Raises:
            SenderInactiveException: Unset, dangling, or inactive; system mail is disabled.
        """
        row = await self._default_sender_repo.get()
        if row is None:
            raise SenderInactiveException("No default sender is configured")
        resolved = await self._resolve_active_by_id(SenderType(row.sender_type), row.sender_id)
        if resolved is None:
            logger.warning(
                "Default sender %s %s is inactive or missing; system mail disabled",
                row.sender_type,
                row.sender_id,
            )
            raise SenderInactiveException()
        return resolved

    async def get_default_sender(self, principal: Principal) -> DefaultSenderSummary | None:
        self._authz.require(principal, Action.READ, _DEFAULT_SENDER_REF)
        row = await self._default_sender_repo.get()
        if row is None:
            return None
        return await self._summarize(SenderType(row.sender_type), row.sender_id, row.version)

    async def set_default_sender(
        self,
        principal: Principal,
        sender_type: SenderType,
        sender_id: str,
        expected_version: int | None = None,
    ) -> DefaultSenderSummary:
        """Point the default sender at an existing, active account or alias.

        Raises:
            ValidationException: Target missing or inactive.
            DefaultSenderVersionConflictException: expected_version is stale.
        """
        self._authz.require(principal, Action.UPDATE_PRIVILEGED_FIELDS, _DEFAULT_SENDER_REF)
        if await self._resolve_active_by_id(sender_type, sender_id) is None:
            raise ValidationException(
                f"Default sender must reference an existing, active {sender_type.value}",
                field="senderId",
            )
        row = await self._default_sender_repo.save(
            sender_type.value, sender_id, principal.user_id, expected_version
        )
        logger.info(
            "Default sender set to %s %s by %s (version %d)",
            sender_type.value,
            sender_id,
            principal.user_id,
            row.version,
        )
        return await self._summarize(sender_type, sender_id, row.version)

    async def clear_default_sender(
        self, principal: Principal, expected_version: int | None = None
    ) -> None:
        self._authz.require(principal, Action.UPDATE_PRIVILEGED_FIELDS, _DEFAULT_SENDER_REF)
        row = await self._default_sender_repo.save(
            None, None, principal.user_id, expected_version
        )
        logger.info("Default sender cleared by %s (version %d)", principal.user_id, row.version)

    async def ensure_not_default(self, sender_type: SenderType, sender_ids: list[str]) -> None:
        """Raise DefaultSenderInUseException if any of sender_ids is the default sender."""
        if await self._default_sender_repo.references(sender_type.value, sender_ids):
            raise DefaultSenderInUseException(sender_type.value, sender_ids[0])

    async def _resolve_active_by_id(
        self, sender_type: SenderType, sender_id: str
    ) -> ResolvedSender | None:
        if sender_type == SenderType.ACCOUNT:
            account = await self._account_repo.get_by_id(sender_id)
            if account is None or not account.is_active:
                return None
            return self._from_account(account)
        pair = await self._alias_repo.get_with_account(sender_id)
        if pair is None:
            return None
        alias, account = pair
        if not (alias.is_active and account.is_active):
            return None
        return self._from_alias(alias, account)

    async def _summarize(
        self, sender_type: SenderType, sender_id: str, version: int
    ) -> DefaultSenderSummary:
        if sender_type == SenderType.ACCOUNT:
            account = await self._account_repo.get_by_id(sender_id)
            if account is None:
                return self._missing_summary(sender_type, sender_id, version)
            return DefaultSenderSummary(
                sender_type=sender_type,
                sender_id=sender_id,
                email=account.email,
                display_label=f"{account.display_name} <{account.email}>",
                via_display=None,
                is_active=account.is_active,
                version=version,
            )
        pair = await self._alias_repo.get_with_account(sender_id)
        if pair is None:
            return self._missing_summary(sender_type, sender_id, version)
        alias, account = pair
        label = alias.display_name or account.display_name
        return DefaultSenderSummary(
            sender_type=sender_type,
            sender_id=sender_id,
            email=alias.alias_email,
            display_label=f"{label} <{alias.alias_email}>",
            via_display=f"via {account.email}",
            is_active=alias.is_active and account.is_active,
            version=version,
        )

    @staticmethod
    def _missing_summary(
        sender_type: SenderType, sender_id: str, version: int
    ) -> DefaultSenderSummary:
        return DefaultSenderSummary(
            sender_type=sender_type,
            sender_id=sender_id,
            email="",
            display_label="Missing sender",
            via_display=None,
            is_active=False,
            version=version,
        )

    def _from_account(self, account: Any) -> ResolvedSender:
        return ResolvedSender(
            sender_type=SenderType.ACCOUNT,
            sender_id=account.id,
            header_from=account.email,
            display_name=account.display_name,
            auth_email=account.email,
            auth_password=self._encryptor.decrypt(account.encrypted_password),
            owner_id=account.owner_id,
            is_public=account.is_public,
        )

    def _from_alias(self, alias: Any, account: Any) -> ResolvedSender:
        return ResolvedSender(
            sender_type=SenderType.ALIAS,
            sender_id=alias.id,
            header_from=alias.alias_email,
            display_name=alias.display_name,
            auth_email=account.email,
            auth_password=self._encryptor.decrypt(account.encrypted_password),
            owner_id=alias.owner_id,
            is_public=alias.is_public,
        )
