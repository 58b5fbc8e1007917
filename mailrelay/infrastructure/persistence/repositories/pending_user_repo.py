"""Pending signup store. Tokens are single-use and consumed by a conditional delete."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.exceptions import TokenExpiredException
from mailrelay.infrastructure.persistence.models.pending_user import PendingUser
from mailrelay.infrastructure.security.tokens import hash_token
from mailrelay.shared.utils.datetime import ensure_utc, utc_now
from mailrelay.shared.utils.generators import generate_url_token

DEFAULT_TOKEN_TTL_MINUTES = 30


@dataclass(frozen=True)
class PendingSignup:
    """Values captured from a consumed pending row."""

    email: str
    password_hash: str


class PendingUserStore:
    """Create and consume signup verification tokens."""

    def __init__(
        self,
        session: AsyncSession,
        ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    ) -> None:
        self._session = session
        self._ttl = timedelta(minutes=ttl_minutes)

    async def create(self, email: str, password_hash: str) -> tuple[str, str, datetime]:
        """Replace any pending signup for email; return (raw_token, row_id, expires_at).

        Expired rows for other emails are purged on the way.
        """
        now = utc_now()
        await self._session.execute(
            delete(PendingUser)
            .where(or_(PendingUser.email == email, PendingUser.expires_at <= now))
            .execution_options(synchronize_session=False)
        )
        raw = generate_url_token()
        expires_at = now + self._ttl
        row = PendingUser(
            token_hash=hash_token(raw),
            email=email,
            password_hash=password_hash,
            expires_at=expires_at,
        )
        self._session.add(row)
        await self._session.flush()
        return (raw, row.id, expires_at)

    async def delete(self, row_id: str) -> None:
        await self._session.execute(
            delete(PendingUser)
            .where(PendingUser.id == row_id)
            .execution_options(synchronize_session=False)
        )

    async def consume(self, token: str) -> PendingSignup:
        """Delete the row for token and return its values.

        Only the caller whose DELETE removed the row succeeds; a concurrent
        caller sees rowcount 0. Unknown, consumed and expired tokens all
        raise TokenExpiredException.
        """
        result = await self._session.execute(
            select(PendingUser).where(PendingUser.token_hash == hash_token(token))
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise TokenExpiredException()
        row_id = row.id
        expires_at = ensure_utc(row.expires_at)
        pending = PendingSignup(email=row.email, password_hash=row.password_hash)
        deleted = await self._session.execute(
            delete(PendingUser)
            .where(PendingUser.id == row_id)
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount != 1:
            raise TokenExpiredException()
        if expires_at is None or expires_at <= utc_now():
            raise TokenExpiredException()
        return pending
