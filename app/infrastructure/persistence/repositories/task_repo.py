"""Task repository (SQLAlchemy). Implements ITaskRepository; returns TaskEntity."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskFilter
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus
from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, (TaskStatus, TaskPriority)) else value


def _tags_to_column(value: Any) -> list[str]:
    return list(value or ())


def _identity(value: Any) -> Any:
    return value


# Entity field -> (ORM attribute, entity->column converter). One table for both
# directions; the read path applies the entity's own coercion on construction.
_FIELD_MAP: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "title": ("title", _identity),
    "description": ("description", _identity),
    "status": ("status", _enum_value),
    "priority": ("priority", _enum_value),
    "due_date": ("due_date", _identity),
    "project_id": ("project_id", _identity),
    "assignee_id": ("assignee_id", _identity),
    "created_by": ("created_by", _identity),
    "tags": ("tags", _tags_to_column),
    "estimated_hours": ("estimated_hours", _identity),
    "actual_hours": ("actual_hours", _identity),
    "created_at": ("created_at", _identity),
    "updated_at": ("updated_at", _identity),
}
# Columns a caller may write through update(); id, created_*, version are managed here.
_UPDATABLE = frozenset(_FIELD_MAP) - {"created_by", "created_at"}

# TaskFilter field -> ORM column for equality filters (tag handled separately).
_FILTER_COLUMNS = {
    "project_id": Task.project_id,
    "assignee_id": Task.assignee_id,
    "created_by": Task.created_by,
    "status": Task.status,
    "priority": Task.priority,
}


def _to_entity(row: Task) -> TaskEntity:
    """Map Task ORM row to TaskEntity."""
    values = {field: getattr(row, attr) for field, (attr, _) in _FIELD_MAP.items()}
    values["tags"] = tuple(values["tags"] or ())
    values["created_at"] = ensure_utc(values["created_at"])
    values["updated_at"] = ensure_utc(values["updated_at"])
    return TaskEntity(id=row.id, version=row.version, **values)


def _to_columns(values: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ValidationException(
            f"Field(s) cannot be written: {', '.join(unknown)}", field=unknown[0]
        )
    out: dict[str, Any] = {}
    for name, value in values.items():
        attr, convert = _FIELD_MAP[name]
        out[attr] = convert(value)
    return out


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository with version-checked updates."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        row = await self._get_row(task_id)
        return _to_entity(row) if row else None

    async def get_all(self, filters: TaskFilter | None = None) -> list[TaskEntity]:
        """Return tasks matching every set filter, newest first."""
        stmt = select(Task)
        if filters is not None:
            stmt = self._apply_filters(stmt, filters)
        rows = await self._list(stmt.order_by(Task.created_at.desc(), Task.id))
        tasks = [_to_entity(r) for r in rows]
        if filters is not None and filters.tag is not None:
            # JSON containment differs per dialect; filter tags after load.
            tasks = [t for t in tasks if filters.tag in t.tags]
        return tasks

    async def get_by_project(self, project_id: str) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(project_id=project_id))

    async def get_by_assignee(self, user_id: str) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(assignee_id=user_id))

    async def get_by_creator(self, user_id: str) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(created_by=user_id))

    async def get_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(status=status))

    async def get_by_priority(self, priority: TaskPriority) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(priority=priority))

    async def create(self, task: TaskEntity) -> TaskEntity:
        """Insert the task with its own id and timestamps; version starts at 1."""
        columns = _to_columns(
            {name: getattr(task, name) for name in _FIELD_MAP}, frozenset(_FIELD_MAP)
        )
        row = await self._add(Task(id=task.id, version=1, **columns))
        logger.debug("Inserted task row id=%s", row.id)
        return _to_entity(row)

    async def update(
        self,
        task_id: str,
        changes: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> TaskEntity | None:
        """Apply changes in one UPDATE ... RETURNING and bump version.

        With expected_version the WHERE clause also matches the version, so a
        stale write affects no row and None is returned.
        """
        columns = _to_columns(changes, _UPDATABLE)
        stmt = (
            update(Task)
            .where(Task.id == task_id)
            .values(**columns, version=Task.version + 1)
            .returning(Task)
            .execution_options(synchronize_session=False)
        )
        if expected_version is not None:
            stmt = stmt.where(Task.version == expected_version)
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            logger.debug(
                "Conditional task update matched no row id=%s expected_version=%s",
                task_id,
                expected_version,
            )
            return None
        await self.db.refresh(row)
        return _to_entity(row)

    async def delete(self, task_id: str) -> bool:
        return await self._delete_by_id(task_id)

    @staticmethod
    def _apply_filters(stmt: Select[tuple[Task]], filters: TaskFilter) -> Select[tuple[Task]]:
        for name, value in filters.active().items():
            column = _FILTER_COLUMNS.get(name)
            if column is not None:
                stmt = stmt.where(column == _enum_value(value))
        return stmt
