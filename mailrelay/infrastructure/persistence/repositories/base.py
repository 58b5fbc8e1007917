"""Base repository: generic CRUD and a pre-delete hook."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.exceptions import ConflictException
from mailrelay.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, update, delete.

    create and update translate integrity violations into the exception
    returned by _conflict (ConflictException by default; repositories keyed
    by email override it). Subclasses override _on_before_delete to remove
    dependent rows.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Return all records, newest first."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).order_by(model.created_at.desc(), model.id)
        )
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; raise ConflictException on an integrity violation."""
        self.db.add(obj)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise self._conflict() from e
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise self._conflict() from e
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    def _conflict(self) -> ConflictException:
        """Exception raised when a write violates a constraint."""
        model: Any = self.model
        return ConflictException(f"{model.__tablename__} conflicts with an existing record")

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to remove dependent rows."""
