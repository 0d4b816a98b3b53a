"""AssignTaskUseCase unit tests: idempotence and notification isolation."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.use_cases.tasks import AssignTaskUseCase
from app.domain.exceptions import ResourceNotFoundException, ValidationException


async def test_assign_persists_and_notifies(task_repo, user_repo, notifier, make_task) -> None:
    task = await make_task()
    updated = await AssignTaskUseCase(task_repo, user_repo, notifier).execute(
        task.id, "u-assignee"
    )
    assert updated.assignee_id == "u-assignee"
    assert updated.version == task.version + 1
    assert notifier.calls == [(task.id, "u-assignee")]


async def test_reassigning_same_user_is_a_noop(
    task_repo, user_repo, notifier, make_task
) -> None:
    task = await make_task()
    use_case = AssignTaskUseCase(task_repo, user_repo, notifier)
    first = await use_case.execute(task.id, "u-assignee")
    second = await use_case.execute(task.id, "u-assignee")
    assert second == first
    assert task_repo.update_calls == 1
    assert len(notifier.calls) == 1


async def test_notify_false_skips_notification(
    task_repo, user_repo, notifier, make_task
) -> None:
    task = await make_task()
    await AssignTaskUseCase(task_repo, user_repo, notifier).execute(
        task.id, "u-assignee", notify=False
    )
    assert notifier.calls == []


async def test_failing_notifier_does_not_fail_assignment(
    task_repo, user_repo, failing_notifier, make_task
) -> None:
    task = await make_task()
    updated = await AssignTaskUseCase(task_repo, user_repo, failing_notifier).execute(
        task.id, "u-assignee"
    )
    assert updated.assignee_id == "u-assignee"
    assert failing_notifier.attempts == 1


async def test_failing_notifier_in_background(
    task_repo, user_repo, failing_notifier, make_task
) -> None:
    task = await make_task()
    dispatcher = NotificationDispatcher()
    updated = await AssignTaskUseCase(
        task_repo, user_repo, failing_notifier, dispatcher
    ).execute(task.id, "u-assignee")
    await dispatcher.drain(timeout=1.0)
    assert updated.assignee_id == "u-assignee"
    assert failing_notifier.attempts == 1
    assert dispatcher.pending_count == 0


@pytest.mark.parametrize("assignee_id", ["", "   "])
async def test_blank_assignee_rejected(task_repo, make_task, assignee_id: str) -> None:
    task = await make_task()
    with pytest.raises(ValidationException, match="Assignee ID is required"):
        await AssignTaskUseCase(task_repo).execute(task.id, assignee_id)


async def test_unknown_assignee_rejected_before_write(task_repo, user_repo, make_task) -> None:
    task = await make_task()
    with pytest.raises(ResourceNotFoundException, match="assignee not found: u-ghost"):
        await AssignTaskUseCase(task_repo, user_repo).execute(task.id, "u-ghost")
    assert task_repo.update_calls == 0


async def test_missing_task(task_repo, user_repo) -> None:
    with pytest.raises(ResourceNotFoundException, match="task not found"):
        await AssignTaskUseCase(task_repo, user_repo).execute("nope", "u-assignee")


async def test_without_user_repo_nobody_is_notified(task_repo, make_task) -> None:
    task = await make_task()
    notifier = AsyncMock()
    updated = await AssignTaskUseCase(task_repo, notifier=notifier).execute(
        task.id, "u-anyone"
    )
    assert updated.assignee_id == "u-anyone"
    notifier.notify_task_assigned.assert_not_called()
