"""Base repository: generic get/create/delete on a single-column primary key."""

from typing import Any, Generic, TypeVar

from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, exists, create and delete.

    Models in this schema use integer primary keys named after the table
    (user_id, series_id, ...); the key column is read from the mapper.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model
        self._pk: Any = sa_inspect(model).primary_key[0]

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        result = await self.db.execute(select(self.model).where(self._pk == entity_id))
        return result.scalar_one_or_none()

    async def exists(self, entity_id: int) -> bool:
        result = await self.db.execute(select(self._pk).where(self._pk == entity_id))
        return result.first() is not None

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it with generated columns loaded."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
