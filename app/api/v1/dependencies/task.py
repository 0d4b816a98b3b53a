"""Task repositories, cache, notifier and use cases (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.repositories import ITaskRepository, IUserRepository
from app.application.interfaces.services import INotificationScheduler, ITaskNotifier
from app.application.services.notification_dispatcher import (
    NotificationDispatcher,
    PostCommitNotifications,
)
from app.application.services.task_cache import TaskCache
from app.application.use_cases.tasks import (
    AssignTaskUseCase,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    TaskQueryService,
    UpdateTaskStatusUseCase,
    UpdateTaskUseCase,
)
from app.core.config import get_settings
from app.infrastructure.persistence.database import (
    add_transaction_hook,
    get_db_transactional,
)
from app.infrastructure.persistence.repositories import TaskRepository, UserRepository
from app.infrastructure.services import LogOnlyNotificationService, TaskAssignmentNotifier


async def get_task_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ITaskRepository:
    """Task repository bound to the request transaction."""
    return TaskRepository(db)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> IUserRepository:
    """User repository bound to the request transaction (same session as tasks)."""
    return UserRepository(db)


def get_task_cache(request: Request) -> TaskCache | None:
    """Task read cache over app.state.cache (None when Redis is disabled or lifespan did not run)."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return None
    return TaskCache(cache, cache_ttl=get_settings().cache_ttl_tasks)


def get_task_notifier() -> ITaskNotifier:
    """Assignment notifier; logs instead of sending mail."""
    return TaskAssignmentNotifier(LogOnlyNotificationService())


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    """Process-wide dispatcher from app.state (created lazily when lifespan did not run)."""
    dispatcher = getattr(request.app.state, "notification_dispatcher", None)
    if dispatcher is None:
        dispatcher = NotificationDispatcher(enabled=get_settings().notifications_enabled)
        request.app.state.notification_dispatcher = dispatcher
    return dispatcher


def get_notification_scheduler(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> INotificationScheduler:
    """Notices raised during the request; dispatched once its transaction commits."""
    notices = PostCommitNotifications(dispatcher)
    add_transaction_hook(db, notices.finish)
    return notices


def get_task_query_service(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    cache: Annotated[TaskCache | None, Depends(get_task_cache)],
) -> TaskQueryService:
    return TaskQueryService(task_repo, cache)


def get_create_task_use_case(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
    notifier: Annotated[ITaskNotifier, Depends(get_task_notifier)],
    scheduler: Annotated[INotificationScheduler, Depends(get_notification_scheduler)],
    cache: Annotated[TaskCache | None, Depends(get_task_cache)],
) -> CreateTaskUseCase:
    return CreateTaskUseCase(task_repo, user_repo, notifier, scheduler, cache=cache)


def get_update_task_use_case(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
    cache: Annotated[TaskCache | None, Depends(get_task_cache)],
) -> UpdateTaskUseCase:
    return UpdateTaskUseCase(task_repo, user_repo, cache=cache)


def get_update_task_status_use_case(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    cache: Annotated[TaskCache | None, Depends(get_task_cache)],
) -> UpdateTaskStatusUseCase:
    return UpdateTaskStatusUseCase(task_repo, cache=cache)


def get_assign_task_use_case(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
    notifier: Annotated[ITaskNotifier, Depends(get_task_notifier)],
    scheduler: Annotated[INotificationScheduler, Depends(get_notification_scheduler)],
    cache: Annotated[TaskCache | None, Depends(get_task_cache)],
) -> AssignTaskUseCase:
    return AssignTaskUseCase(task_repo, user_repo, notifier, scheduler, cache=cache)


def get_delete_task_use_case(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repo)],
    cache: Annotated[TaskCache | None, Depends(get_task_cache)],
) -> DeleteTaskUseCase:
    return DeleteTaskUseCase(task_repo, cache=cache)
