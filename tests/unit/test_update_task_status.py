"""UpdateTaskStatusUseCase unit tests."""

import pytest

from app.application.use_cases.tasks import UpdateTaskStatusUseCase
from app.domain.enums import TaskStatus, UserRole
from app.domain.exceptions import (
    AuthorizationException,
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.core import Actor

ASSIGNEE = Actor("u-assignee", UserRole.DEVELOPER)
STRANGER = Actor("u-other", UserRole.DEVELOPER)


async def test_assignee_starts_work(task_repo, make_task) -> None:
    task = await make_task(assignee_id="u-assignee")
    updated = await UpdateTaskStatusUseCase(task_repo).execute(
        task.id, "in_progress", ASSIGNEE
    )
    assert updated.status is TaskStatus.IN_PROGRESS
    assert updated.version == task.version + 1
    assert task_repo.tasks[task.id].status is TaskStatus.IN_PROGRESS


async def test_todo_to_done_is_not_reachable(task_repo, make_task) -> None:
    task = await make_task(assignee_id="u-assignee")
    with pytest.raises(ValidationException) as exc_info:
        await UpdateTaskStatusUseCase(task_repo).execute(task.id, "done", ASSIGNEE)
    assert isinstance(exc_info.value, InvalidStatusTransitionException)
    assert "in_progress, review" in exc_info.value.message
    assert task_repo.tasks[task.id].status is TaskStatus.TODO


async def test_full_workflow_and_reopen(task_repo, make_task) -> None:
    task = await make_task()
    use_case = UpdateTaskStatusUseCase(task_repo)
    creator = Actor("u-creator", UserRole.DEVELOPER)
    for status in ("in_progress", "review", "done", "todo"):
        task = await use_case.execute(task.id, status, creator)
    assert task.status is TaskStatus.TODO
    assert task.version == 5


async def test_unrelated_user_is_forbidden(task_repo, make_task) -> None:
    task = await make_task(assignee_id="u-assignee")
    with pytest.raises(AuthorizationException):
        await UpdateTaskStatusUseCase(task_repo).execute(task.id, "in_progress", STRANGER)
    assert task_repo.update_calls == 0


async def test_admin_moves_any_task(task_repo, make_task) -> None:
    task = await make_task(status=TaskStatus.REVIEW)
    updated = await UpdateTaskStatusUseCase(task_repo).execute(
        task.id, TaskStatus.DONE, Actor("u-admin", UserRole.ADMIN)
    )
    assert updated.status is TaskStatus.DONE


async def test_unknown_status_value(task_repo, make_task) -> None:
    task = await make_task(assignee_id="u-assignee")
    with pytest.raises(ValidationException) as exc_info:
        await UpdateTaskStatusUseCase(task_repo).execute(task.id, "blocked", ASSIGNEE)
    assert exc_info.value.message == (
        "Invalid status. Must be one of: todo, in_progress, review, done"
    )


async def test_missing_task(task_repo) -> None:
    with pytest.raises(ResourceNotFoundException):
        await UpdateTaskStatusUseCase(task_repo).execute("missing", "review", ASSIGNEE)


async def test_comment_does_not_change_task(task_repo, make_task) -> None:
    task = await make_task(assignee_id="u-assignee")
    updated = await UpdateTaskStatusUseCase(task_repo).execute(
        task.id, "review", ASSIGNEE, comment="ready for eyes"
    )
    assert updated.status is TaskStatus.REVIEW
    assert updated.description == task.description
