"""API token repository. Lookups go through the SHA-256 digest of the secret."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.infrastructure.persistence.models.api_token import ApiToken
from mailrelay.infrastructure.persistence.repositories.base import BaseRepository
from mailrelay.infrastructure.security.tokens import hash_token
from mailrelay.shared.utils.datetime import utc_now


class ApiTokenRepository(BaseRepository[ApiToken]):
    """API token repository. Secrets never reach this layer except to be hashed."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApiToken)

    async def create_token(self, user_id: str, secret: str, name: str | None) -> ApiToken:
        token = ApiToken(user_id=user_id, name=name, token_hash=hash_token(secret))
        return await self.create(token)

    async def get_by_secret(self, secret: str) -> ApiToken | None:
        result = await self.db.execute(
            select(ApiToken).where(ApiToken.token_hash == hash_token(secret))
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: str) -> list[ApiToken]:
        result = await self.db.execute(
            select(ApiToken)
            .where(ApiToken.user_id == user_id)
            .order_by(ApiToken.created_at.desc(), ApiToken.id)
        )
        return list(result.scalars().all())

    async def delete_for_user(self, token_id: str, user_id: str) -> bool:
        """Delete the token only if it belongs to user_id; return whether a row was removed."""
        result = await self.db.execute(
            delete(ApiToken)
            .where(ApiToken.id == token_id, ApiToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_all_for_user(self, user_id: str) -> None:
        await self.db.execute(
            delete(ApiToken)
            .where(ApiToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )

    async def touch_last_used(self, token_id: str) -> None:
        await self.db.execute(
            update(ApiToken)
            .where(ApiToken.id == token_id)
            .values(last_used_at=utc_now())
            .execution_options(synchronize_session=False)
        )
