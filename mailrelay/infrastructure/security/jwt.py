"""Session token signing and decoding (HS256 JWT).

A session token carries the user id in ``sub`` plus the ``role`` and
``email`` seen at login. Role and flags are re-read from the user row on
every request; the claims only identify the session.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from mailrelay.core.config import get_settings
from mailrelay.domain.enums import UserRole
from mailrelay.domain.value_objects import SessionCredential

REQUIRED_CLAIMS = ("sub", "role", "exp")


def create_session_token(
    user_id: str,
    role: UserRole | str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a session token for the user.

    Args:
        user_id: Becomes the ``sub`` claim.
        role: Role at login time.
        email: Normalized login email.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes (12 h).
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": user_id,
        "role": UserRole(role).value,
        "email": email,
        "exp": datetime.now(UTC) + ttl,
    }
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def decode_session_token(token: str) -> SessionCredential:
    """Verify the signature and expiry, then return the session credential.

    Raises:
        ValueError: Bad signature, expired, missing sub/role/exp or unknown role.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid session token: {e!s}") from e
    missing = [claim for claim in REQUIRED_CLAIMS if not payload.get(claim)]
    if missing:
        raise ValueError(f"Session token missing claims: {', '.join(missing)}")
    try:
        role = UserRole(payload["role"])
    except ValueError as e:
        raise ValueError(f"Session token has unknown role: {payload['role']!r}") from e
    return SessionCredential(
        user_id=str(payload["sub"]),
        role=role,
        expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
    )
