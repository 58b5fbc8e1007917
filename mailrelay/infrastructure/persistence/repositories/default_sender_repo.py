"""Default sender repository: single versioned row with compare-and-swap writes."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.exceptions import DefaultSenderVersionConflictException
from mailrelay.infrastructure.persistence.models.default_sender import (
    SINGLETON_ID,
    DefaultSender,
)
from mailrelay.shared.utils.datetime import utc_now


class DefaultSenderRepository:
    """Read and write the default sender row.

    Every write bumps version and only applies if the version read by
    this transaction is still current, so concurrent admins cannot
    silently overwrite each other.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self) -> DefaultSender | None:
        """Return the row when a sender is set, else None (unset or cleared)."""
        row = await self._get_row()
        if row is None or row.sender_id is None:
            return None
        return row

    async def current_version(self) -> int:
        row = await self._get_row()
        return row.version if row else 0

    async def save(
        self,
        sender_type: str | None,
        sender_id: str | None,
        updated_by: str | None,
        expected_version: int | None = None,
    ) -> DefaultSender:
        """Point the default sender at (sender_type, sender_id); None clears it.

        Raises:
            DefaultSenderVersionConflictException: expected_version is stale or
                another writer got in between.
        """
        row = await self._get_row()
        current = row.version if row else 0
        if expected_version is not None and expected_version != current:
            raise DefaultSenderVersionConflictException(expected_version, current)
        if row is None:
            row = DefaultSender(
                id=SINGLETON_ID,
                sender_type=sender_type,
                sender_id=sender_id,
                version=1,
                updated_by=updated_by,
            )
            self.db.add(row)
            try:
                await self.db.flush()
            except IntegrityError as e:
                raise DefaultSenderVersionConflictException(current, current + 1) from e
            return row
        result = await self.db.execute(
            update(DefaultSender)
            .where(DefaultSender.id == SINGLETON_ID, DefaultSender.version == current)
            .values(
                sender_type=sender_type,
                sender_id=sender_id,
                version=current + 1,
                updated_at=utc_now(),
                updated_by=updated_by,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise DefaultSenderVersionConflictException(current, current + 1)
        await self.db.refresh(row)
        return row

    async def references(self, sender_type: str, sender_ids: list[str]) -> bool:
        """True when the default sender points at any of sender_ids of sender_type."""
        if not sender_ids:
            return False
        result = await self.db.execute(
            select(DefaultSender.id).where(
                DefaultSender.sender_type == sender_type,
                DefaultSender.sender_id.in_(sender_ids),
            )
        )
        return result.scalar_one_or_none() is not None

    async def _get_row(self) -> DefaultSender | None:
        result = await self.db.execute(
            select(DefaultSender).where(DefaultSender.id == SINGLETON_ID)
        )
        return result.scalar_one_or_none()
