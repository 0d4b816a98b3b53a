"""Base repository: generic lookups, create and delete for one ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with row-level get_by_id, create, delete and a list helper.

    Subclasses map rows to domain entities or DTOs in their public methods.
    LSP: subclasses are substitutable for BaseRepository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_row(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _list(self, stmt: Select[tuple[ModelType]]) -> list[ModelType]:
        """Execute a select of this model and return all rows."""
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it refreshed from the database."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _delete_by_id(self, entity_id: str) -> bool:
        """Delete by primary key; return True if a row was removed."""
        model: Any = self.model
        result: Any = await self.db.execute(delete(self.model).where(model.id == entity_id))
        return bool(result.rowcount)
