"""Session token signing and decoding."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from mailrelay.core.config import get_settings
from mailrelay.domain.enums import CredentialKind, UserRole
from mailrelay.infrastructure.security.jwt import create_session_token, decode_session_token


def _sign(claims: dict) -> str:
    settings = get_settings()
    return jwt.encode(claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm)


def test_round_trip_yields_session_credential() -> None:
    credential = decode_session_token(create_session_token("u1", "dev", "dev@example.com"))
    assert credential.user_id == "u1"
    assert credential.role == UserRole.DEV
    assert credential.kind == CredentialKind.SESSION
    ttl = timedelta(minutes=get_settings().access_token_expire_minutes)
    remaining = credential.expires_at - datetime.now(UTC)
    assert ttl - timedelta(minutes=1) < remaining <= ttl


def test_claims_carry_role_and_email() -> None:
    settings = get_settings()
    token = create_session_token("u1", UserRole.ADMIN, "root@example.com")
    claims = jwt.decode(token, settings.secret_key.get_secret_value(), algorithms=[settings.algorithm])
    assert claims["sub"] == "u1"
    assert claims["role"] == "admin"
    assert claims["email"] == "root@example.com"


def test_expired_token_rejected() -> None:
    token = create_session_token("u1", UserRole.USER, "u@example.com", timedelta(seconds=-5))
    with pytest.raises(ValueError):
        decode_session_token(token)


def test_wrong_signature_rejected() -> None:
    token = jwt.encode(
        {"sub": "u1", "role": "user", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm="HS256",
    )
    with pytest.raises(ValueError):
        decode_session_token(token)


@pytest.mark.parametrize(
    "claims",
    [
        {"sub": "u1"},
        {"sub": "u1", "role": ""},
        {"sub": "u1", "role": "superuser"},
    ],
    ids=["missing-role", "blank-role", "unknown-role"],
)
def test_role_claim_required_and_known(claims: dict) -> None:
    token = _sign({**claims, "exp": datetime.now(UTC) + timedelta(minutes=5)})
    with pytest.raises(ValueError):
        decode_session_token(token)


def test_missing_sub_rejected() -> None:
    token = _sign({"role": "user", "exp": datetime.now(UTC) + timedelta(minutes=5)})
    with pytest.raises(ValueError):
        decode_session_token(token)
