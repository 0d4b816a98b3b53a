"""Dedicated status change use case (moves a task along the workflow)."""

from __future__ import annotations

from app.application.interfaces.repositories import ITaskRepository
from app.application.services.task_cache import TaskCache
from app.application.services.task_permission_service import TaskPermissionEvaluator
from app.application.services.task_transition_validator import TaskTransitionValidator
from app.application.use_cases.tasks._common import (
    invalidate_cached_task,
    load_task_or_raise,
    log_rejection,
    persist_changes,
)
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskStatus
from app.domain.exceptions import TaskboardException, ValidationException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class UpdateTaskStatusUseCase:
    """Changes only the status of a task; creator, assignee or admin may do it."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        permissions: TaskPermissionEvaluator | None = None,
        transitions: TaskTransitionValidator | None = None,
        cache: TaskCache | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.permissions = permissions or TaskPermissionEvaluator()
        self.transitions = transitions or TaskTransitionValidator()
        self.cache = cache

    async def execute(
        self,
        task_id: str,
        new_status: TaskStatus | str,
        actor: Actor,
        comment: str | None = None,
    ) -> TaskEntity:
        """Move the task to new_status.

        Args:
            task_id: Task to move.
            new_status: Target status (enum or its string value).
            actor: Authenticated caller.
            comment: Free text recorded in the log only.

        Returns:
            The stored task with the new status.

        Raises:
            ResourceNotFoundException: Task does not exist.
            ValidationException: Unknown status value.
            AuthorizationException: Actor is neither admin, creator nor assignee.
            InvalidStatusTransitionException: Move not allowed from the current status.
            TaskVersionConflictException: Task changed since it was loaded.
        """
        try:
            task = await load_task_or_raise(self.task_repo, task_id)
            status = self._parse_status(new_status)
            self.permissions.require_status_change(task, actor)
            self.transitions.validate_transition(task.status, status)
            candidate = task.update({"status": status}, now=utc_now())
            updated = await persist_changes(
                self.task_repo,
                task,
                {"status": candidate.status, "updated_at": candidate.updated_at},
            )
        except TaskboardException as exc:
            log_rejection(
                "status change", exc, task_id=task_id, actor_id=actor.id, fields=("status",)
            )
            raise

        await invalidate_cached_task(self.cache, task_id)
        logger.info(
            "Task status changed task_id=%s actor_id=%s from=%s to=%s comment=%r",
            task_id,
            actor.id,
            task.status.value,
            updated.status.value,
            comment,
        )
        return updated

    @staticmethod
    def _parse_status(value: TaskStatus | str) -> TaskStatus:
        if isinstance(value, TaskStatus):
            return value
        try:
            return TaskStatus(value)
        except ValueError:
            raise ValidationException(
                f"Invalid status. Must be one of: {', '.join(TaskStatus.values())}",
                field="status",
            ) from None
