"""Helpers shared by the task use cases: load, conditional persist, cache invalidation,
notification, rejection logging.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.interfaces.services import INotificationScheduler, ITaskNotifier
from app.application.services.task_cache import TaskCache
from app.domain.entities.task import TaskEntity
from app.domain.exceptions import (
    ResourceNotFoundException,
    TaskboardException,
    TaskVersionConflictException,
)
from app.shared.telemetry.logging import get_logger, log_context

logger = get_logger(__name__)


async def load_task_or_raise(task_repo: ITaskRepository, task_id: str) -> TaskEntity:
    """Return the task or raise ResourceNotFoundException("task", task_id)."""
    task = await task_repo.get_by_id(task_id)
    if task is None:
        raise ResourceNotFoundException("task", task_id)
    return task


async def load_user_or_raise(
    user_repo: IUserRepository, user_id: str, resource_type: str = "user"
) -> UserResult:
    """Return the user or raise ResourceNotFoundException(resource_type, user_id)."""
    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise ResourceNotFoundException(resource_type, user_id)
    return user


async def persist_changes(
    task_repo: ITaskRepository,
    task: TaskEntity,
    changes: Mapping[str, Any],
) -> TaskEntity:
    """Write changes conditionally on the version task was loaded with.

    Returns the stored task. When nothing matched, re-reads the row to tell a
    concurrent delete (ResourceNotFoundException) from a concurrent write
    (TaskVersionConflictException).
    """
    updated = await task_repo.update(task.id, changes, expected_version=task.version)
    if updated is not None:
        return updated
    if await task_repo.get_by_id(task.id) is None:
        raise ResourceNotFoundException("task", task.id)
    raise TaskVersionConflictException(task.id, task.version)


async def invalidate_cached_task(cache: TaskCache | None, task_id: str | None = None) -> None:
    """Drop cached reads the write made stale (the task itself and every listing)."""
    if cache is not None:
        await cache.invalidate(task_id)


async def notify_assignment(
    notifier: ITaskNotifier | None,
    dispatcher: INotificationScheduler | None,
    task: TaskEntity,
    assignee: UserResult,
) -> None:
    """Send the task-assigned notice without letting a failure reach the caller.

    With a dispatcher the notice runs in the background; without one it is
    awaited inline and any error is logged.
    """
    if notifier is None:
        return
    label = f"task_assigned:{task.id}"
    if dispatcher is not None:
        dispatcher.dispatch(notifier.notify_task_assigned(task, assignee), label=label)
        return
    try:
        await notifier.notify_task_assigned(task, assignee)
    except Exception:
        logger.exception("Notification failed label=%s", label)


def log_rejection(
    operation: str,
    exc: TaskboardException,
    *,
    task_id: str | None,
    actor_id: str | None,
    fields: Iterable[str] = (),
) -> None:
    """Log a rejected task operation at warning level before it propagates."""
    attempted = ",".join(sorted(fields)) or None
    logger.warning(
        "Task %s rejected: %s %s",
        operation,
        exc.error_code,
        log_context(
            task_id=task_id, actor_id=actor_id, fields=attempted, reason=exc.message
        ),
    )
