"""General task update use case (partial patch of mutable fields)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.services.task_cache import TaskCache
from app.application.services.task_permission_service import TaskPermissionEvaluator
from app.application.services.task_transition_validator import TaskTransitionValidator
from app.application.use_cases.tasks._common import (
    invalidate_cached_task,
    load_task_or_raise,
    load_user_or_raise,
    log_rejection,
    persist_changes,
)
from app.domain.entities.task import TaskEntity, ensure_due_date_in_future
from app.domain.exceptions import TaskboardException, ValidationException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class UpdateTaskUseCase:
    """Applies a partial update: load, authorize, validate, persist (version-checked)."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_repo: IUserRepository | None = None,
        permissions: TaskPermissionEvaluator | None = None,
        transitions: TaskTransitionValidator | None = None,
        cache: TaskCache | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.permissions = permissions or TaskPermissionEvaluator()
        self.transitions = transitions or TaskTransitionValidator()
        self.cache = cache

    async def execute(
        self,
        task_id: str,
        changes: Mapping[str, Any],
        actor: Actor | None = None,
    ) -> TaskEntity:
        """Update the given fields of a task.

        A None value clears nullable fields (assignee_id, due_date). When
        status is in the patch it must be a legal move from the stored status.

        Raises:
            ResourceNotFoundException: Task (or new assignee) does not exist.
            AuthorizationException: Actor may not change these fields.
            ValidationException: Empty patch, immutable field, invalid value or transition.
            TaskVersionConflictException: Task changed since it was loaded.
        """
        actor_id = actor.id if actor else None
        try:
            task = await load_task_or_raise(self.task_repo, task_id)
            if actor is not None:
                self.permissions.require_update(task, actor, changes.keys())
            if not changes:
                raise ValidationException("No fields to update")
            now = utc_now()
            candidate = task.update(changes, now=now)
            if "due_date" in changes:
                ensure_due_date_in_future(candidate.due_date, now)
            if "status" in changes:
                self.transitions.validate_transition(task.status, candidate.status)
            if (
                self.user_repo is not None
                and candidate.assignee_id is not None
                and candidate.assignee_id != task.assignee_id
            ):
                await load_user_or_raise(self.user_repo, candidate.assignee_id, "assignee")

            normalized = {name: getattr(candidate, name) for name in changes}
            updated = await persist_changes(
                self.task_repo, task, {**normalized, "updated_at": candidate.updated_at}
            )
        except TaskboardException as exc:
            log_rejection(
                "update", exc, task_id=task_id, actor_id=actor_id, fields=changes.keys()
            )
            raise

        await invalidate_cached_task(self.cache, task_id)
        logger.info(
            "Task updated task_id=%s actor_id=%s fields=%s version=%d",
            updated.id,
            actor_id,
            ",".join(sorted(changes)),
            updated.version,
        )
        return updated
