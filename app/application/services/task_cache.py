"""Task read cache: lookups and listings stored as JSON over ICacheService.

Keys:
    task:id:<task_id>    one task
    task:list:<scope>    one listing; scope is "all" or the active filters
                         as name=value pairs joined with "&"
Every write drops the task's own key and all listing keys.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from app.application.dtos.task import TaskFilter
from app.application.interfaces.services import ICacheService
from app.domain.entities.task import TaskEntity
from app.domain.exceptions import ValidationException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

CACHE_PREFIX_TASK = "task"
CACHE_KEY_SEP = ":"

_DATETIME_FIELDS = ("due_date", "created_at", "updated_at")


def task_key(task_id: str) -> str:
    """Cache key for one task by ID."""
    return f"{CACHE_PREFIX_TASK}{CACHE_KEY_SEP}id{CACHE_KEY_SEP}{task_id}"


def task_list_key(filters: TaskFilter | None = None) -> str:
    """Cache key for a task listing; filter order does not matter."""
    active = filters.active() if filters else {}
    scope = "&".join(
        f"{name}={getattr(value, 'value', value)}" for name, value in sorted(active.items())
    )
    return f"{CACHE_PREFIX_TASK}{CACHE_KEY_SEP}list{CACHE_KEY_SEP}{scope or 'all'}"


def task_list_pattern() -> str:
    """SCAN pattern matching every task listing key."""
    return f"{CACHE_PREFIX_TASK}{CACHE_KEY_SEP}list{CACHE_KEY_SEP}*"


def task_to_cached(task: TaskEntity) -> dict[str, Any]:
    """Serialize a task to a JSON-safe dict."""
    data = asdict(task)
    data["status"] = task.status.value
    data["priority"] = task.priority.value
    data["tags"] = list(task.tags)
    for name in _DATETIME_FIELDS:
        value = data[name]
        data[name] = value.isoformat() if value is not None else None
    return data


def task_from_cached(cached: dict[str, Any]) -> TaskEntity:
    """Build a task from a cache dict; deserializes ISO datetime fields."""
    data = dict(cached)
    for name in _DATETIME_FIELDS:
        if data.get(name) is not None:
            data[name] = datetime.fromisoformat(data[name])
    return TaskEntity(**data)


class TaskCache:
    """Read-through cache for task queries; every method is a no-op when the cache is down."""

    def __init__(self, cache: ICacheService, cache_ttl: int = 300) -> None:
        self.cache = cache
        self.cache_ttl = cache_ttl

    def _usable(self) -> bool:
        return self.cache.is_available()

    async def get_task(self, task_id: str) -> TaskEntity | None:
        """Return the cached task, or None on a miss."""
        if not self._usable():
            return None
        key = task_key(task_id)
        cached = await self.cache.get(key)
        if cached is None:
            return None
        decoded = self._decode(key, [cached])
        return decoded[0] if decoded else None

    async def put_task(self, task: TaskEntity) -> None:
        if self._usable():
            await self.cache.set(task_key(task.id), task_to_cached(task), ttl=self.cache_ttl)

    async def get_list(self, filters: TaskFilter | None = None) -> list[TaskEntity] | None:
        """Return the cached listing, or None on a miss (an empty list is a hit)."""
        if not self._usable():
            return None
        key = task_list_key(filters)
        cached = await self.cache.get(key)
        if cached is None:
            return None
        return self._decode(key, cached)

    async def put_list(self, filters: TaskFilter | None, tasks: list[TaskEntity]) -> None:
        if self._usable():
            await self.cache.set(
                task_list_key(filters),
                [task_to_cached(t) for t in tasks],
                ttl=self.cache_ttl,
            )

    async def invalidate(self, task_id: str | None = None) -> None:
        """Drop the task's key (when given) and every listing."""
        if not self._usable():
            return
        if task_id is not None:
            await self.cache.delete(task_key(task_id))
        await self.cache.delete_pattern(task_list_pattern())

    def _decode(self, key: str, items: list[dict[str, Any]]) -> list[TaskEntity] | None:
        try:
            return [task_from_cached(item) for item in items]
        except (TypeError, ValueError, ValidationException):
            logger.warning("Ignoring unreadable cache entry key=%s", key)
            return None
