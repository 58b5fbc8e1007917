"""Account management: mailbox credentials gated by the authorization engine."""

from __future__ import annotations

import logging
from typing import Any

from mailrelay.application.dtos.account import AccountResult
from mailrelay.application.interfaces.services import ICredentialEncryptor
from mailrelay.application.services.authorization_service import (
    AuthorizationService,
    update_action_for,
)
from mailrelay.application.services.sender_service import SenderService
from mailrelay.domain.enums import Action, ResourceType, SenderType
from mailrelay.domain.exceptions import (
    AuthorizationException,
    EmailAlreadyRegisteredException,
    ResourceNotFoundException,
    ValidationException,
)
from mailrelay.domain.value_objects import Principal, ResourceRef, normalize_email

logger = logging.getLogger(__name__)

_BOOL_FIELDS = ("is_active", "is_public")


def account_ref(a: Any) -> ResourceRef:
    """ResourceRef for an account row."""
    return ResourceRef(
        ResourceType.ACCOUNT, resource_id=a.id, owner_id=a.owner_id, is_public=a.is_public
    )


def _account_to_result(a: Any) -> AccountResult:
    return AccountResult(
        id=a.id,
        email=a.email,
        display_name=a.display_name,
        is_active=a.is_active,
        is_public=a.is_public,
        owner_id=a.owner_id,
        created_at=a.created_at,
    )


async def resolve_owner(
    principal: Principal, owner_id: str | None, user_repo: Any
) -> str | None:
    """Owner for a new account/alias: dev creations belong to the dev; admin may assign anyone."""
    if not principal.is_admin:
        return principal.user_id
    if owner_id is None:
        return None
    if await user_repo.get_by_id(owner_id) is None:
        raise ValidationException("Owner does not exist", field="ownerId")
    return owner_id


def check_bool_fields(changes: dict[str, Any]) -> None:
    for name in _BOOL_FIELDS:
        if name in changes and changes[name] is None:
            raise ValidationException(f"{name} cannot be null", field=name)


class AccountService:
    """List, create, update and delete accounts."""

    def __init__(
        self,
        account_repo: Any,
        alias_repo: Any,
        user_repo: Any,
        sender_service: SenderService,
        encryptor: ICredentialEncryptor,
        authz: AuthorizationService,
    ) -> None:
        self._account_repo = account_repo
        self._alias_repo = alias_repo
        self._user_repo = user_repo
        self._sender_service = sender_service
        self._encryptor = encryptor
        self._authz = authz

    async def list_accounts(self, principal: Principal) -> list[AccountResult]:
        """Return the accounts principal may read."""
        accounts = await self._account_repo.get_all()
        readable = self._authz.filter_readable(principal, accounts, account_ref)
        return [_account_to_result(a) for a in readable]

    async def create_account(
        self,
        principal: Principal,
        email: str,
        display_name: str,
        password: str,
        is_active: bool = True,
        is_public: bool = True,
        owner_id: str | None = None,
    ) -> AccountResult:
        """Create an account; dev callers become its owner.

        Raises:
            AuthorizationException: Caller may not create accounts, or a dev set ownerId.
            ValidationException: Blank email/password or unknown owner.
            EmailAlreadyRegisteredException: Address taken by an account or alias.
        """
        self._authz.require(principal, Action.CREATE, ResourceRef(ResourceType.ACCOUNT))
        if owner_id is not None and not principal.is_admin:
            raise AuthorizationException(
                resource=ResourceType.ACCOUNT.value,
                action=Action.UPDATE_PRIVILEGED_FIELDS.value,
            )
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationException("Email is required", field="email")
        if not password:
            raise ValidationException("Password is required", field="password")
        owner = await resolve_owner(principal, owner_id, self._user_repo)
        if await self._alias_repo.get_by_email(normalized) is not None:
            raise EmailAlreadyRegisteredException(normalized)
        account = await self._account_repo.create_account(
            email=normalized,
            display_name=display_name.strip() or normalized,
            encrypted_password=self._encryptor.encrypt(password),
            is_active=is_active,
            is_public=is_public,
            owner_id=owner,
        )
        logger.info("Account %s created by %s", account.id, principal.user_id)
        return _account_to_result(account)

    async def update_account(
        self, principal: Principal, account_id: str, changes: dict[str, Any]
    ) -> AccountResult:
        """Apply a partial update. password and owner_id are admin-only.

        Raises:
            ValidationException: Empty update or invalid values.
            ResourceNotFoundException: Unknown account.
            AuthorizationException: Caller may not touch these fields on this account.
        """
        if not changes:
            raise ValidationException("No fields to update")
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        action = update_action_for(ResourceType.ACCOUNT, changes)
        self._authz.require(principal, action, account_ref(account))
        check_bool_fields(changes)

        if "display_name" in changes:
            name = (changes["display_name"] or "").strip()
            if not name:
                raise ValidationException("Display name cannot be empty", field="displayName")
            account.display_name = name
        if "password" in changes:
            if not changes["password"]:
                raise ValidationException("Password cannot be empty", field="password")
            account.encrypted_password = self._encryptor.encrypt(changes["password"])
        if "owner_id" in changes:
            new_owner = changes["owner_id"]
            if new_owner is not None and await self._user_repo.get_by_id(new_owner) is None:
                raise ValidationException("Owner does not exist", field="ownerId")
            account.owner_id = new_owner
        for name in _BOOL_FIELDS:
            if name in changes:
                setattr(account, name, changes[name])
        updated = await self._account_repo.update(account)
        logger.info(
            "Account %s updated by %s (%s)", account_id, principal.user_id, ", ".join(sorted(changes))
        )
        return _account_to_result(updated)

    async def delete_account(self, principal: Principal, account_id: str) -> None:
        """Delete an account and its aliases.

        Raises:
            ResourceNotFoundException: Unknown account.
            AuthorizationException: Caller does not own it (and is not admin).
            DefaultSenderInUseException: The account or one of its aliases is the default sender.
        """
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        self._authz.require(principal, Action.DELETE, account_ref(account))
        await self._sender_service.ensure_not_default(SenderType.ACCOUNT, [account.id])
        alias_ids = await self._alias_repo.list_ids_for_account(account.id)
        await self._sender_service.ensure_not_default(SenderType.ALIAS, alias_ids)
        await self._account_repo.delete(account)
        logger.info(
            "Account %s deleted by %s with %d alias(es)", account_id, principal.user_id, len(alias_ids)
        )
