"""Password reset token store. Same single-use semantics as the signup store."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.exceptions import TokenExpiredException
from mailrelay.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from mailrelay.infrastructure.security.tokens import hash_token
from mailrelay.shared.utils.datetime import ensure_utc, utc_now
from mailrelay.shared.utils.generators import generate_url_token

DEFAULT_TOKEN_TTL_MINUTES = 30


class PasswordResetTokenStore:
    """Create and consume password reset tokens."""

    def __init__(
        self,
        session: AsyncSession,
        ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    ) -> None:
        self._session = session
        self._ttl = timedelta(minutes=ttl_minutes)

    async def create(self, user_id: str) -> tuple[str, datetime]:
        """Replace earlier tokens for user; return (raw_token, expires_at)."""
        now = utc_now()
        await self._session.execute(
            delete(PasswordResetToken)
            .where(
                or_(
                    PasswordResetToken.user_id == user_id,
                    PasswordResetToken.expires_at <= now,
                )
            )
            .execution_options(synchronize_session=False)
        )
        raw = generate_url_token()
        expires_at = now + self._ttl
        self._session.add(
            PasswordResetToken(
                token_hash=hash_token(raw),
                user_id=user_id,
                expires_at=expires_at,
            )
        )
        await self._session.flush()
        return (raw, expires_at)

    async def consume(self, token: str) -> str:
        """Delete the row for token and return its user_id (single winner under concurrency)."""
        result = await self._session.execute(
            select(PasswordResetToken).where(
                PasswordResetToken.token_hash == hash_token(token)
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise TokenExpiredException()
        row_id = row.id
        user_id = row.user_id
        expires_at = ensure_utc(row.expires_at)
        deleted = await self._session.execute(
            delete(PasswordResetToken)
            .where(PasswordResetToken.id == row_id)
            .execution_options(synchronize_session=False)
        )
        if deleted.rowcount != 1:
            raise TokenExpiredException()
        if expires_at is None or expires_at <= utc_now():
            raise TokenExpiredException()
        return user_id

    async def delete_for_user(self, user_id: str) -> None:
        await self._session.execute(
            delete(PasswordResetToken)
            .where(PasswordResetToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
