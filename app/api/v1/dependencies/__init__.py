"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the current actor, repositories, the task
cache, notification scheduling and the task and user use cases. Routes
depend only on these, not on infrastructure directly. Tests override
get_task_repo, get_user_repo, get_task_notifier, get_task_cache and
get_notification_scheduler.
"""

from app.api.v1.dependencies.auth import (
    get_current_actor,
    get_current_actor_optional,
    require_roles,
)
from app.api.v1.dependencies.task import (
    get_assign_task_use_case,
    get_create_task_use_case,
    get_delete_task_use_case,
    get_notification_dispatcher,
    get_notification_scheduler,
    get_task_cache,
    get_task_notifier,
    get_task_query_service,
    get_task_repo,
    get_update_task_status_use_case,
    get_update_task_use_case,
    get_user_repo,
)
from app.api.v1.dependencies.user import (
    get_authenticate_user_use_case,
    get_change_password_use_case,
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_user_use_case,
)

__all__ = [
    "get_assign_task_use_case",
    "get_authenticate_user_use_case",
    "get_change_password_use_case",
    "get_create_task_use_case",
    "get_create_user_use_case",
    "get_current_actor",
    "get_current_actor_optional",
    "get_delete_task_use_case",
    "get_delete_user_use_case",
    "get_get_user_use_case",
    "get_list_users_use_case",
    "get_notification_dispatcher",
    "get_notification_scheduler",
    "get_task_cache",
    "get_task_notifier",
    "get_task_query_service",
    "get_task_repo",
    "get_update_task_status_use_case",
    "get_update_task_use_case",
    "get_update_user_use_case",
    "get_user_repo",
    "require_roles",
]
