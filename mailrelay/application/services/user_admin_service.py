"""User administration (admin only): list, invite, update, delete."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mailrelay.application.dtos.user import UserResult
from mailrelay.application.interfaces.services import IAuthSecurity
from mailrelay.application.services.authorization_service import (
    AuthorizationService,
    update_action_for,
)
from mailrelay.application.services.session_service import (
    user_to_result,
    validate_password_strength,
)
from mailrelay.domain.enums import Action, ResourceType, UserRole
from mailrelay.domain.exceptions import ResourceNotFoundException, ValidationException
from mailrelay.domain.value_objects import Principal, ResourceRef, normalize_email

logger = logging.getLogger(__name__)


def _user_ref(user_id: str | None = None) -> ResourceRef:
    return ResourceRef(ResourceType.USER, resource_id=user_id)


class UserAdminService:
    """Manage users. An admin can never delete itself or change its own role."""

    def __init__(
        self,
        user_repo: Any,
        api_token_repo: Any,
        auth_security: IAuthSecurity,
        authz: AuthorizationService,
        min_password_length: int = 8,
    ) -> None:
        self._user_repo = user_repo
        self._api_token_repo = api_token_repo
        self._auth_security = auth_security
        self._authz = authz
        self._min_password_length = min_password_length

    async def list_users(self, principal: Principal) -> list[UserResult]:
        self._authz.require(principal, Action.READ, _user_ref())
        users = await self._user_repo.get_all()
        return [user_to_result(u) for u in users]

    async def create_user(
        self,
        principal: Principal,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        must_change_password: bool = False,
    ) -> UserResult:
        """Create a user with any role.

        Raises:
            ValidationException: Blank email or short password.
            EmailAlreadyRegisteredException: Email taken.
        """
        self._authz.require(principal, Action.CREATE, _user_ref())
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationException("Email is required", field="email")
        validate_password_strength(password, self._min_password_length)
        password_hash = await asyncio.to_thread(self._auth_security.hash_password, password)
        user = await self._user_repo.create_user(
            normalized, password_hash, role=role, must_change_password=must_change_password
        )
        logger.info("User %s (%s) created by %s", user.id, role.value, principal.user_id)
        return user_to_result(user)

    async def update_user(
        self, principal: Principal, user_id: str, changes: dict[str, Any]
    ) -> UserResult:
        """Update password, role and/or must_change_password.

        Setting a password clears must_change_password unless the same
        request sets it explicitly.

        Raises:
            ValidationException: Empty update or short password.
            ResourceNotFoundException: Unknown user.
            AuthorizationException: Role change on the caller's own user.
        """
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            raise ValidationException("No fields to update")
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        action = update_action_for(ResourceType.USER, changes)
        self._authz.require(principal, action, _user_ref(user.id))

        if "password" in changes:
            validate_password_strength(changes["password"], self._min_password_length)
            user.password_hash = await asyncio.to_thread(
                self._auth_security.hash_password, changes["password"]
            )
            user.must_change_password = False
        if "role" in changes:
            user.role = UserRole(changes["role"]).value
        if "must_change_password" in changes:
            user.must_change_password = bool(changes["must_change_password"])
        updated = await self._user_repo.update(user)
        logger.info("User %s updated by %s (%s)", user_id, principal.user_id, ", ".join(sorted(changes)))
        return user_to_result(updated)

    async def delete_user(self, principal: Principal, user_id: str) -> None:
        """Delete a user, its API tokens and reset tokens; owned mailboxes become unowned.

        Raises:
            AuthorizationException: Target is the caller (checked before existence).
            ResourceNotFoundException: Unknown user.
        """
        self._authz.require(principal, Action.DELETE, _user_ref(user_id))
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        await self._api_token_repo.delete_all_for_user(user.id)
        await self._user_repo.delete(user)
        logger.info("User %s deleted by %s", user_id, principal.user_id)
