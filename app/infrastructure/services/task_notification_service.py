"""Task notifications: log-only sender and the task-assigned notifier."""

from __future__ import annotations

import logging

from app.application.dtos.user import UserResult
from app.application.interfaces.services import INotificationService
from app.domain.entities.task import TaskEntity
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of sending email.

    Use when no mail transport is configured. Production can swap in an SMTP
    or queue-based implementation.
    """

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Log the notification; no actual email sent."""
        recipients = list(to_emails or [])
        subject_preview = (subject or "")[:80]
        if not recipients:
            logger.info("Notify: no recipients, skipping (subject=%r)", subject_preview)
            return
        logger.info(
            "Notify: would send to %d recipient(s) (subject=%r)",
            len(recipients),
            subject_preview,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notify recipients: %s", recipients)
            logger.debug("Notify body (first 500 chars): %s", (body or "")[:500])


def render_assignment_body(task: TaskEntity, assignee: UserResult) -> str:
    """Plain-text body of the task-assigned notice."""
    lines = [
        f"Hello {assignee.full_name or assignee.email},",
        "",
        "You have been assigned a new task:",
        "",
        f"  Title:    {task.title}",
        f"  Priority: {task.priority.value}",
        f"  Status:   {task.status.value}",
    ]
    if task.due_date is not None:
        lines.append(f"  Due:      {task.due_date.isoformat()}")
    if task.description:
        lines += ["", task.description[:500]]
    return "\n".join(lines)


class TaskAssignmentNotifier:
    """ITaskNotifier: tells an assignee about a task through an INotificationService."""

    def __init__(self, notification_service: INotificationService) -> None:
        self.notification_service = notification_service

    async def notify_task_assigned(self, task: TaskEntity, assignee: UserResult) -> None:
        if not assignee.is_active:
            logger.info(
                "Skipping assignment notice for inactive user task_id=%s assignee_id=%s",
                task.id,
                assignee.id,
            )
            return
        await self.notification_service.send(
            [assignee.email],
            f"New Task Assigned: {task.title}",
            render_assignment_body(task, assignee),
        )
