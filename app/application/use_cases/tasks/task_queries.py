"""Read-side task queries."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from app.application.dtos.task import TaskFilter
from app.application.interfaces.repositories import ITaskRepository
from app.application.services.task_cache import TaskCache
from app.application.use_cases.tasks._common import load_task_or_raise
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus


class TaskQueryService:
    """Task lookups and listings. No permission checks; any authenticated caller may read.

    With a TaskCache, results are served from the cache when present and
    stored there after a repository read.
    """

    def __init__(self, task_repo: ITaskRepository, cache: TaskCache | None = None) -> None:
        self.task_repo = task_repo
        self.cache = cache

    async def get_task(self, task_id: str) -> TaskEntity:
        """Return the task or raise ResourceNotFoundException."""
        if self.cache is not None:
            cached = await self.cache.get_task(task_id)
            if cached is not None:
                return cached
        task = await load_task_or_raise(self.task_repo, task_id)
        if self.cache is not None:
            await self.cache.put_task(task)
        return task

    async def list_tasks(self, filters: TaskFilter | None = None) -> list[TaskEntity]:
        """Return tasks matching every set filter (all tasks when none are set)."""
        if filters is None or not filters.active():
            return await self._read_list(None, self.task_repo.get_all)
        return await self._read_list(filters, lambda: self.task_repo.get_all(filters))

    async def list_by_project(self, project_id: str) -> list[TaskEntity]:
        return await self._read_list(
            TaskFilter(project_id=project_id),
            lambda: self.task_repo.get_by_project(project_id),
        )

    async def list_assigned_to(self, user_id: str) -> list[TaskEntity]:
        return await self._read_list(
            TaskFilter(assignee_id=user_id),
            lambda: self.task_repo.get_by_assignee(user_id),
        )

    async def list_created_by(self, user_id: str) -> list[TaskEntity]:
        return await self._read_list(
            TaskFilter(created_by=user_id),
            lambda: self.task_repo.get_by_creator(user_id),
        )

    async def list_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        return await self._read_list(
            TaskFilter(status=status), lambda: self.task_repo.get_by_status(status)
        )

    async def list_by_priority(self, priority: TaskPriority) -> list[TaskEntity]:
        return await self._read_list(
            TaskFilter(priority=priority), lambda: self.task_repo.get_by_priority(priority)
        )

    async def _read_list(
        self,
        filters: TaskFilter | None,
        load: Callable[[], Awaitable[list[TaskEntity]]],
    ) -> list[TaskEntity]:
        """Serve the listing for filters from the cache, else load and store it."""
        if self.cache is not None:
            cached = await self.cache.get_list(filters)
            if cached is not None:
                return cached
        tasks = await load()
        if self.cache is not None:
            await self.cache.put_list(filters, tasks)
        return tasks
