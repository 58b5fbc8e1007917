"""Alias management. An alias always sends through its parent account's credential."""

from __future__ import annotations

import logging
from typing import Any

from mailrelay.application.dtos.account import AliasResult
from mailrelay.application.services.account_service import check_bool_fields, resolve_owner
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


def alias_ref(alias: Any) -> ResourceRef:
    return ResourceRef(
        ResourceType.ALIAS,
        resource_id=alias.id,
        owner_id=alias.owner_id,
        is_public=alias.is_public,
    )


def _alias_to_result(alias: Any, account: Any) -> AliasResult:
    return AliasResult(
        id=alias.id,
        alias_email=alias.alias_email,
        display_name=alias.display_name,
        account_id=account.id,
        account_email=account.email,
        account_display_name=account.display_name,
        account_is_active=account.is_active,
        is_active=alias.is_active,
        is_public=alias.is_public,
        owner_id=alias.owner_id,
        created_at=alias.created_at,
    )


class AliasService:
    """List, create, update and delete aliases."""

    def __init__(
        self,
        alias_repo: Any,
        account_repo: Any,
        user_repo: Any,
        sender_service: SenderService,
        authz: AuthorizationService,
    ) -> None:
        self._alias_repo = alias_repo
        self._account_repo = account_repo
        self._user_repo = user_repo
        self._sender_service = sender_service
        self._authz = authz

    async def list_aliases(self, principal: Principal) -> list[AliasResult]:
        pairs = await self._alias_repo.list_with_accounts()
        readable = self._authz.filter_readable(principal, pairs, lambda pair: alias_ref(pair[0]))
        return [_alias_to_result(alias, account) for alias, account in readable]

    async def create_alias(
        self,
        principal: Principal,
        alias_email: str,
        account_id: str,
        display_name: str | None = None,
        is_active: bool = True,
        is_public: bool = True,
        owner_id: str | None = None,
    ) -> AliasResult:
        """Create an alias on an existing account.

        A dev may only attach aliases to accounts it owns and always owns the alias.

        Raises:
            AuthorizationException: Caller may not create, or does not own the account.
            ValidationException: Blank address, unknown account or owner.
            EmailAlreadyRegisteredException: Address taken by an account or alias.
        """
        self._authz.require(principal, Action.CREATE, ResourceRef(ResourceType.ALIAS))
        if owner_id is not None and not principal.is_admin:
            raise AuthorizationException(
                resource=ResourceType.ALIAS.value,
                action=Action.UPDATE_PRIVILEGED_FIELDS.value,
            )
        normalized = normalize_email(alias_email)
        if not normalized:
            raise ValidationException("Alias email is required", field="aliasEmail")
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise ValidationException("Account does not exist", field="accountId")
        if not principal.is_admin and account.owner_id != principal.user_id:
            raise AuthorizationException(
                resource=ResourceType.ACCOUNT.value,
                action=Action.CREATE.value,
                message="Aliases can only be added to accounts you own",
            )
        owner = await resolve_owner(principal, owner_id, self._user_repo)
        if await self._account_repo.get_by_email(normalized) is not None:
            raise EmailAlreadyRegisteredException(normalized)
        name = display_name.strip() if display_name and display_name.strip() else None
        alias = await self._alias_repo.create_alias(
            alias_email=normalized,
            display_name=name,
            account_id=account.id,
            is_active=is_active,
            is_public=is_public,
            owner_id=owner,
        )
        logger.info("Alias %s created on account %s by %s", alias.id, account.id, principal.user_id)
        return _alias_to_result(alias, account)

    async def update_alias(
        self, principal: Principal, alias_id: str, changes: dict[str, Any]
    ) -> AliasResult:
        """Apply a partial update. owner_id and account_id are admin-only."""
        if not changes:
            raise ValidationException("No fields to update")
        pair = await self._alias_repo.get_with_account(alias_id)
        if pair is None:
            raise ResourceNotFoundException("alias", alias_id)
        alias, account = pair
        action = update_action_for(ResourceType.ALIAS, changes)
        self._authz.require(principal, action, alias_ref(alias))
        check_bool_fields(changes)

        if "display_name" in changes:
            name = changes["display_name"]
            alias.display_name = name.strip() if name and name.strip() else None
        if "account_id" in changes:
            new_account = await self._account_repo.get_by_id(changes["account_id"] or "")
            if new_account is None:
                raise ValidationException("Account does not exist", field="accountId")
            alias.account_id = new_account.id
            account = new_account
        if "owner_id" in changes:
            new_owner = changes["owner_id"]
            if new_owner is not None and await self._user_repo.get_by_id(new_owner) is None:
                raise ValidationException("Owner does not exist", field="ownerId")
            alias.owner_id = new_owner
        for name in ("is_active", "is_public"):
            if name in changes:
                setattr(alias, name, changes[name])
        updated = await self._alias_repo.update(alias)
        logger.info("Alias %s updated by %s (%s)", alias_id, principal.user_id, ", ".join(sorted(changes)))
        return _alias_to_result(updated, account)

    async def delete_alias(self, principal: Principal, alias_id: str) -> None:
        """Delete an alias unless it is the default sender."""
        alias = await self._alias_repo.get_by_id(alias_id)
        if alias is None:
            raise ResourceNotFoundException("alias", alias_id)
        self._authz.require(principal, Action.DELETE, alias_ref(alias))
        await self._sender_service.ensure_not_default(SenderType.ALIAS, [alias.id])
        await self._alias_repo.delete(alias)
        logger.info("Alias %s deleted by %s", alias_id, principal.user_id)
