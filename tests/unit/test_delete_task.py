"""DeleteTaskUseCase unit tests."""

import pytest

from app.application.use_cases.tasks import DeleteTaskUseCase
from app.domain.enums import UserRole
from app.domain.exceptions import AuthorizationException, ResourceNotFoundException
from app.domain.value_objects.core import Actor


async def test_creator_deletes(task_repo, make_task) -> None:
    task = await make_task()
    assert await DeleteTaskUseCase(task_repo).execute(
        task.id, Actor("u-creator", UserRole.DEVELOPER)
    )
    assert task.id not in task_repo.tasks


async def test_admin_deletes_foreign_task(task_repo, make_task) -> None:
    task = await make_task()
    assert await DeleteTaskUseCase(task_repo).execute(task.id, Actor("u-admin", UserRole.ADMIN))


@pytest.mark.parametrize(
    "actor",
    [
        Actor("u-other", UserRole.DEVELOPER),
        Actor("u-assignee", UserRole.DEVELOPER),
        Actor("u-manager", UserRole.MANAGER),
    ],
)
async def test_others_are_forbidden(task_repo, make_task, actor: Actor) -> None:
    task = await make_task(assignee_id="u-assignee")
    with pytest.raises(AuthorizationException, match="delete this task"):
        await DeleteTaskUseCase(task_repo).execute(task.id, actor)
    assert task.id in task_repo.tasks


async def test_missing_task(task_repo) -> None:
    with pytest.raises(ResourceNotFoundException):
        await DeleteTaskUseCase(task_repo).execute("gone", Actor("u-admin", UserRole.ADMIN))
