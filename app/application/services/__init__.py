"""Application services: transition rules, permission rules, notification dispatch, task read cache."""

from app.application.services.notification_dispatcher import (
    NotificationDispatcher,
    PostCommitNotifications,
)
from app.application.services.task_cache import TaskCache
from app.application.services.task_permission_service import TaskPermissionEvaluator
from app.application.services.task_transition_validator import (
    TASK_STATUS_TRANSITIONS,
    TaskTransitionValidator,
)

__all__ = [
    "NotificationDispatcher",
    "PostCommitNotifications",
    "TASK_STATUS_TRANSITIONS",
    "TaskCache",
    "TaskPermissionEvaluator",
    "TaskTransitionValidator",
]
