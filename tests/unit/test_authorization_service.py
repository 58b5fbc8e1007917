"""AuthorizationService policy: role x ownership x action."""

import pytest

from mailrelay.application.services.authorization_service import (
    AuthorizationService,
    update_action_for,
)
from mailrelay.domain.enums import Action, CredentialKind, ResourceType, UserRole
from mailrelay.domain.exceptions import (
    AuthorizationException,
    PasswordChangeRequiredException,
)
from mailrelay.domain.value_objects import Principal, ResourceRef

authz = AuthorizationService()


def _principal(
    role: UserRole,
    user_id: str = "u1",
    must_change_password: bool = False,
    kind: CredentialKind = CredentialKind.SESSION,
) -> Principal:
    return Principal(
        user_id=user_id,
        email=f"{user_id}@example.com",
        role=role,
        must_change_password=must_change_password,
        credential_kind=kind,
    )


OWNED = ResourceRef(ResourceType.ACCOUNT, resource_id="a1", owner_id="u1", is_public=False)
FOREIGN_PUBLIC = ResourceRef(ResourceType.ACCOUNT, resource_id="a2", owner_id="u2", is_public=True)
FOREIGN_PRIVATE = ResourceRef(ResourceType.ALIAS, resource_id="x1", owner_id="u2", is_public=False)
UNOWNED_PRIVATE = ResourceRef(ResourceType.ACCOUNT, resource_id="a3", owner_id=None, is_public=False)


@pytest.mark.parametrize(
    ("role", "action", "resource", "expected"),
    [
        (UserRole.ADMIN, Action.DELETE, FOREIGN_PRIVATE, True),
        (UserRole.ADMIN, Action.UPDATE_PRIVILEGED_FIELDS, UNOWNED_PRIVATE, True),
        (UserRole.ADMIN, Action.READ, ResourceRef(ResourceType.DEFAULT_SENDER), True),
        (UserRole.DEV, Action.READ, OWNED, True),
        (UserRole.DEV, Action.READ, FOREIGN_PUBLIC, True),
        (UserRole.DEV, Action.READ, FOREIGN_PRIVATE, False),
        (UserRole.DEV, Action.CREATE, ResourceRef(ResourceType.ACCOUNT), True),
        (UserRole.DEV, Action.UPDATE_OWN_FIELDS, OWNED, True),
        (UserRole.DEV, Action.UPDATE_OWN_FIELDS, FOREIGN_PUBLIC, False),
        (UserRole.DEV, Action.UPDATE_PRIVILEGED_FIELDS, OWNED, False),
        (UserRole.DEV, Action.DELETE, OWNED, True),
        (UserRole.DEV, Action.DELETE, UNOWNED_PRIVATE, False),
        (UserRole.DEV, Action.READ, ResourceRef(ResourceType.USER), False),
        (UserRole.DEV, Action.READ, ResourceRef(ResourceType.DEFAULT_SENDER), False),
        (UserRole.USER, Action.READ, FOREIGN_PUBLIC, True),
        (UserRole.USER, Action.READ, FOREIGN_PRIVATE, False),
        (UserRole.USER, Action.CREATE, ResourceRef(ResourceType.ALIAS), False),
        (UserRole.USER, Action.UPDATE_OWN_FIELDS, OWNED, False),
        (UserRole.USER, Action.DELETE, OWNED, False),
    ],
)
def test_policy_matrix(role: UserRole, action: Action, resource: ResourceRef, expected: bool) -> None:
    assert authz.is_allowed(_principal(role), action, resource) is expected


def test_admin_cannot_delete_or_demote_self() -> None:
    admin = _principal(UserRole.ADMIN, user_id="root")
    me = ResourceRef(ResourceType.USER, resource_id="root")
    other = ResourceRef(ResourceType.USER, resource_id="someone")
    assert authz.is_allowed(admin, Action.DELETE, me) is False
    assert authz.is_allowed(admin, Action.UPDATE_PRIVILEGED_FIELDS, me) is False
    assert authz.is_allowed(admin, Action.UPDATE_OWN_FIELDS, me) is True
    assert authz.is_allowed(admin, Action.DELETE, other) is True


def test_require_raises_forbidden_with_details() -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        authz.require(_principal(UserRole.USER), Action.DELETE, OWNED)
    assert exc_info.value.details == {"resource": "account", "action": "delete"}


def test_password_change_gate_applies_to_sessions_only() -> None:
    """The gate wins over the policy for sessions; API tokens skip it."""
    pending = _principal(UserRole.ADMIN, must_change_password=True)
    with pytest.raises(PasswordChangeRequiredException):
        authz.require(pending, Action.READ, FOREIGN_PUBLIC)

    via_token = _principal(
        UserRole.USER, must_change_password=True, kind=CredentialKind.API_TOKEN
    )
    authz.require(via_token, Action.READ, FOREIGN_PUBLIC)


def test_filter_readable_keeps_visible_items() -> None:
    items = [OWNED, FOREIGN_PUBLIC, FOREIGN_PRIVATE, UNOWNED_PRIVATE]
    visible = authz.filter_readable(_principal(UserRole.DEV), items, lambda ref: ref)
    assert visible == [OWNED, FOREIGN_PUBLIC]


def test_update_action_for_own_fields() -> None:
    assert (
        update_action_for(ResourceType.ACCOUNT, {"display_name", "is_public"})
        == Action.UPDATE_OWN_FIELDS
    )


def test_update_action_for_escalates_on_any_privileged_field() -> None:
    assert (
        update_action_for(ResourceType.ACCOUNT, {"display_name", "password"})
        == Action.UPDATE_PRIVILEGED_FIELDS
    )
    assert update_action_for(ResourceType.ALIAS, {"account_id"}) == Action.UPDATE_PRIVILEGED_FIELDS
    assert update_action_for(ResourceType.USER, {"role"}) == Action.UPDATE_PRIVILEGED_FIELDS


def test_update_action_for_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError):
        update_action_for(ResourceType.ACCOUNT, {"encrypted_password"})
