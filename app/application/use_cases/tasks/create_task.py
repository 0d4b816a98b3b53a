"""Task creation use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.interfaces.services import INotificationScheduler, ITaskNotifier
from app.application.services.task_cache import TaskCache
from app.application.use_cases.tasks._common import (
    invalidate_cached_task,
    load_user_or_raise,
    log_rejection,
    notify_assignment,
)
from app.domain.entities.task import TaskEntity, ensure_due_date_in_future
from app.domain.exceptions import AuthorizationException, TaskboardException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class CreateTaskUseCase:
    """Creates a task: validate, confirm referenced users, persist, notify assignee."""

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
        self, data: Mapping[str, Any], actor: Actor | None = None
    ) -> TaskEntity:
        """Create and persist a task.

        When actor is given the task is created on the actor's behalf; only an
        admin may name a different created_by.

        Args:
            data: Task fields (title, project_id required; created_by required without actor).
            actor: Authenticated caller, if any.

        Returns:
            The stored task.

        Raises:
            ValidationException: Missing/invalid field or due date not in the future.
            AuthorizationException: Non-admin tried to create for someone else.
            ResourceNotFoundException: Creator or assignee does not exist.
        """
        actor_id = actor.id if actor else None
        try:
            props = self._resolve_creator(dict(data), actor)
            now = utc_now()
            task = TaskEntity.create(props, now=now)
            ensure_due_date_in_future(task.due_date, now)
            assignee = await self._check_users(task)
        except TaskboardException as exc:
            log_rejection("create", exc, task_id=None, actor_id=actor_id, fields=data.keys())
            raise

        created = await self.task_repo.create(task)
        await invalidate_cached_task(self.cache)
        logger.info(
            "Task created task_id=%s project_id=%s created_by=%s assignee_id=%s",
            created.id,
            created.project_id,
            created.created_by,
            created.assignee_id,
        )
        if assignee is not None:
            await notify_assignment(self.notifier, self.dispatcher, created, assignee)
        return created

    @staticmethod
    def _resolve_creator(props: dict[str, Any], actor: Actor | None) -> dict[str, Any]:
        if actor is None:
            return props
        requested = props.get("created_by")
        if requested and requested != actor.id and not actor.is_admin:
            raise AuthorizationException(
                resource="task",
                action="create",
                message="Only administrators can create tasks on behalf of another user",
            )
        props["created_by"] = requested or actor.id
        return props

    async def _check_users(self, task: TaskEntity) -> UserResult | None:
        """Confirm creator and assignee exist; return the assignee (None if unset or unchecked)."""
        if self.user_repo is None:
            return None
        await load_user_or_raise(self.user_repo, task.created_by, "creator")
        if task.assignee_id is None:
            return None
        return await load_user_or_raise(self.user_repo, task.assignee_id, "assignee")
