"""Authorization service: role x ownership x action policy over relay resources.

Pure and synchronous; callers load the target first and pass a ResourceRef.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from mailrelay.domain.enums import Action, ResourceType, UserRole
from mailrelay.domain.exceptions import (
    AuthorizationException,
    PasswordChangeRequiredException,
)
from mailrelay.domain.value_objects import Principal, ResourceRef

T = TypeVar("T")

# Field names as they arrive in update commands (snake_case).
OWN_FIELDS: dict[ResourceType, frozenset[str]] = {
    ResourceType.ACCOUNT: frozenset({"display_name", "is_active", "is_public"}),
    ResourceType.ALIAS: frozenset({"display_name", "is_active", "is_public"}),
    ResourceType.USER: frozenset({"password", "must_change_password"}),
}
PRIVILEGED_FIELDS: dict[ResourceType, frozenset[str]] = {
    ResourceType.ACCOUNT: frozenset({"password", "owner_id"}),
    ResourceType.ALIAS: frozenset({"owner_id", "account_id"}),
    ResourceType.USER: frozenset({"role"}),
}

_MAILBOX_RESOURCES = frozenset({ResourceType.ACCOUNT, ResourceType.ALIAS})


def update_action_for(resource_type: ResourceType, fields: Iterable[str]) -> Action:
    """Return the action an update touching fields requires.

    Any privileged field escalates the whole update. Unknown fields raise
    ValueError so a new column cannot slip through as an own field.
    """
    fields = set(fields)
    privileged = PRIVILEGED_FIELDS[resource_type]
    unknown = fields - privileged - OWN_FIELDS[resource_type]
    if unknown:
        raise ValueError(f"Unclassified fields for {resource_type.value}: {sorted(unknown)}")
    if fields & privileged:
        return Action.UPDATE_PRIVILEGED_FIELDS
    return Action.UPDATE_OWN_FIELDS


class AuthorizationService:
    """Centralized allow/deny decisions.

    admin: everything except deleting or changing the role of its own user.
    dev: creates accounts/aliases; reads owned or public ones; updates own
    fields and deletes only what it owns; no privileged fields, users or
    default sender.
    user: reads public (or owned) accounts/aliases only.
    """

    def is_allowed(
        self, principal: Principal, action: Action, resource: ResourceRef
    ) -> bool:
        """Return True if principal may perform action on resource."""
        if principal.role == UserRole.ADMIN:
            return self._admin_allowed(principal, action, resource)
        if resource.resource_type not in _MAILBOX_RESOURCES:
            return False
        owns = resource.owner_id is not None and resource.owner_id == principal.user_id
        if action == Action.READ:
            return owns or resource.is_public
        if principal.role != UserRole.DEV:
            return False
        if action == Action.CREATE:
            return True
        if action in (Action.UPDATE_OWN_FIELDS, Action.DELETE):
            return owns
        return False

    def ensure_password_updated(self, principal: Principal) -> None:
        """Raise while a session principal still has must_change_password set."""
        if principal.password_change_pending:
            raise PasswordChangeRequiredException()

    def require(
        self, principal: Principal, action: Action, resource: ResourceRef
    ) -> None:
        """Apply the password-change gate, then the policy.

        Raises:
            PasswordChangeRequiredException: Session must change its password first.
            AuthorizationException: Policy denies the action.
        """
        self.ensure_password_updated(principal)
        if not self.is_allowed(principal, action, resource):
            raise AuthorizationException(
                resource=resource.resource_type.value, action=action.value
            )

    def filter_readable(
        self,
        principal: Principal,
        items: Iterable[T],
        to_ref: Callable[[T], ResourceRef],
    ) -> list[T]:
        """Keep only items principal may read (list endpoints)."""
        self.ensure_password_updated(principal)
        return [
            item for item in items if self.is_allowed(principal, Action.READ, to_ref(item))
        ]

    @staticmethod
    def _admin_allowed(
        principal: Principal, action: Action, resource: ResourceRef
    ) -> bool:
        if (
            resource.resource_type == ResourceType.USER
            and resource.resource_id == principal.user_id
            and action in (Action.DELETE, Action.UPDATE_PRIVILEGED_FIELDS)
        ):
            return False
        return True
