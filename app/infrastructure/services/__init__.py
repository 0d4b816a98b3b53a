"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.task_notification_service import (
    LogOnlyNotificationService,
    TaskAssignmentNotifier,
)

__all__ = [
    "LogOnlyNotificationService",
    "TaskAssignmentNotifier",
]
