"""Value objects and address helpers."""

import pytest

from mailrelay.domain.enums import CredentialKind, ResourceType, UserRole
from mailrelay.domain.value_objects import (
    Principal,
    ResourceRef,
    normalize_email,
    parse_address_list,
)


def test_normalize_email() -> None:
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


def test_parse_address_list_drops_blanks() -> None:
    assert parse_address_list(" a@x.org, ,b@x.org,") == ["a@x.org", "b@x.org"]
    assert parse_address_list(None) == []
    assert parse_address_list("") == []


def test_resource_ref_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        ResourceRef("mailbox")  # type: ignore[arg-type]


def test_resource_ref_defaults() -> None:
    ref = ResourceRef(ResourceType.ACCOUNT)
    assert ref.resource_id is None
    assert ref.owner_id is None
    assert ref.is_public is False


def test_principal_password_change_pending_only_for_sessions() -> None:
    session = Principal("u1", "u1@example.com", UserRole.USER, True, CredentialKind.SESSION)
    token = Principal("u1", "u1@example.com", UserRole.USER, True, CredentialKind.API_TOKEN)
    assert session.password_change_pending is True
    assert token.password_change_pending is False
    assert token.is_session is False


def test_principal_is_admin() -> None:
    admin = Principal("u1", "u1@example.com", UserRole.ADMIN, False, CredentialKind.SESSION)
    assert admin.is_admin is True
