"""TaskAssignmentNotifier and LogOnlyNotificationService tests."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from app.application.dtos.user import UserResult
from app.domain.entities.task import TaskEntity
from app.domain.enums import UserRole
from app.infrastructure.services import LogOnlyNotificationService, TaskAssignmentNotifier
from app.infrastructure.services.task_notification_service import render_assignment_body


def _user(is_active: bool = True) -> UserResult:
    return UserResult(
        id="u-assignee",
        email="assignee@example.com",
        first_name="Ada",
        last_name="Assignee",
        role=UserRole.DEVELOPER,
        is_active=is_active,
    )


def _task() -> TaskEntity:
    return TaskEntity.create(
        {
            "title": "Fix login bug",
            "project_id": "p-1",
            "created_by": "u-creator",
            "priority": "high",
            "due_date": datetime(2031, 5, 1, 17, 0, tzinfo=UTC),
            "description": "Users are logged out after refresh.",
        }
    )


async def test_sends_subject_and_body_to_assignee() -> None:
    sender = AsyncMock()
    await TaskAssignmentNotifier(sender).notify_task_assigned(_task(), _user())
    sender.send.assert_awaited_once()
    to_emails, subject, body = sender.send.await_args.args
    assert to_emails == ["assignee@example.com"]
    assert subject == "New Task Assigned: Fix login bug"
    assert "Hello Ada Assignee," in body
    assert "Priority: high" in body
    assert "2031-05-01T17:00:00+00:00" in body


async def test_inactive_assignee_is_skipped() -> None:
    sender = AsyncMock()
    await TaskAssignmentNotifier(sender).notify_task_assigned(_task(), _user(is_active=False))
    sender.send.assert_not_called()


def test_body_without_due_date_or_description() -> None:
    task = TaskEntity.create({"title": "Bare task", "project_id": "p", "created_by": "u"})
    body = render_assignment_body(task, _user())
    assert "Due:" not in body
    assert body.endswith("Status:   todo")


async def test_log_only_sender_logs(caplog) -> None:
    caplog.set_level("INFO")
    await LogOnlyNotificationService().send(["a@example.com"], "Hi", "body")
    await LogOnlyNotificationService().send([], "Nobody", "body")
    assert "would send to 1 recipient(s)" in caplog.text
    assert "no recipients, skipping" in caplog.text
