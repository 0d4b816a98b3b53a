"""Task assignment use case."""

from __future__ import annotations

from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.interfaces.services import INotificationScheduler, ITaskNotifier
from app.application.services.task_cache import TaskCache
from app.application.use_cases.tasks._common import (
    invalidate_cached_task,
    load_task_or_raise,
    load_user_or_raise,
    log_rejection,
    notify_assignment,
    persist_changes,
)
from app.domain.entities.task import TaskEntity
from app.domain.exceptions import TaskboardException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class AssignTaskUseCase:
    """Assigns a task to a user and notifies them.

    Reassigning to the current assignee is a no-op (no write, no notice).
    Role gating happens at the HTTP layer.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_repo: IUserRepository | None = None,
        notifier: ITaskNotifier | None = None,
        dispatcher: INotificationScheduler | None = None,
        cache: TaskCache | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.notifier = notifier
        self.dispatcher = dispatcher
        self.cache = cache

    async def execute(
        self, task_id: str, assignee_id: str, notify: bool = True
    ) -> TaskEntity:
        """Assign task_id to assignee_id; returns the (possibly unchanged) task.

        Raises:
            ValidationException: Empty assignee_id.
            ResourceNotFoundException: Task or assignee does not exist.
            TaskVersionConflictException: Task changed since it was loaded.
        """
        try:
            if not assignee_id or not assignee_id.strip():
                raise ValidationException("Assignee ID is required", field="assignee_id")
            task = await load_task_or_raise(self.task_repo, task_id)
            assignee = (
                await load_user_or_raise(self.user_repo, assignee_id, "assignee")
                if self.user_repo is not None
                else None
            )
            if task.is_assigned_to(assignee_id):
                logger.warning(
                    "Task already assigned, skipping task_id=%s assignee_id=%s",
                    task_id,
                    assignee_id,
                )
                return task
            candidate = task.update({"assignee_id": assignee_id}, now=utc_now())
            updated = await persist_changes(
                self.task_repo,
                task,
                {"assignee_id": candidate.assignee_id, "updated_at": candidate.updated_at},
            )
        except TaskboardException as exc:
            log_rejection(
                "assign", exc, task_id=task_id, actor_id=None, fields=("assignee_id",)
            )
            raise

        await invalidate_cached_task(self.cache, task_id)
        logger.info(
            "Task assigned task_id=%s from=%s to=%s",
            task_id,
            task.assignee_id,
            assignee_id,
        )
        if notify and assignee is not None:
            await notify_assignment(self.notifier, self.dispatcher, updated, assignee)
        return updated
