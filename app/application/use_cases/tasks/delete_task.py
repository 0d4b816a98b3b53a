"""Task deletion use case."""

from __future__ import annotations

from app.application.interfaces.repositories import ITaskRepository
from app.application.services.task_cache import TaskCache
from app.application.services.task_permission_service import TaskPermissionEvaluator
from app.application.use_cases.tasks._common import (
    invalidate_cached_task,
    load_task_or_raise,
    log_rejection,
)
from app.domain.exceptions import TaskboardException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class DeleteTaskUseCase:
    """Deletes a task; only its creator or an admin may do so."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        permissions: TaskPermissionEvaluator | None = None,
        cache: TaskCache | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.permissions = permissions or TaskPermissionEvaluator()
        self.cache = cache

    async def execute(self, task_id: str, actor: Actor) -> bool:
        """Delete the task. Returns whether the repository removed a record."""
        try:
            task = await load_task_or_raise(self.task_repo, task_id)
            self.permissions.require_delete(task, actor)
        except TaskboardException as exc:
            log_rejection("delete", exc, task_id=task_id, actor_id=actor.id)
            raise
        deleted = await self.task_repo.delete(task_id)
        await invalidate_cached_task(self.cache, task_id)
        logger.info("Task deleted task_id=%s actor_id=%s removed=%s", task_id, actor.id, deleted)
        return deleted
