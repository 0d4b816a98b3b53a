"""Task and user repository integration tests. Require Postgres; session is rolled back after each test."""

from datetime import timedelta

import pytest

from app.application.dtos.task import TaskFilter
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.exceptions import DuplicateEmailException
from app.infrastructure.persistence.repositories import TaskRepository, UserRepository
from app.shared.utils.datetime import utc_now


async def _seed_users(db_session):
    users = UserRepository(db_session)
    creator = await users.create_user("repo-creator@example.com", "Cora", "Creator")
    assignee = await users.create_user(
        "repo-assignee@example.com", "Abe", "Assignee", UserRole.DEVELOPER
    )
    return creator, assignee


def _task(created_by: str, **props) -> TaskEntity:
    return TaskEntity.create(
        {"title": "Repo task", "project_id": "repo-p", "created_by": created_by, **props}
    )


@pytest.mark.requires_db
async def test_create_and_get_round_trip(db_session) -> None:
    """Create stores every field; get_by_id maps it back with version 1."""
    creator, assignee = await _seed_users(db_session)
    repo = TaskRepository(db_session)
    due = utc_now() + timedelta(days=3)
    created = await repo.create(
        _task(
            creator.id,
            assignee_id=assignee.id,
            tags=["db", "repo"],
            priority="high",
            due_date=due,
        )
    )
    found = await repo.get_by_id(created.id)
    assert found is not None
    assert found.version == 1
    assert found.tags == ("db", "repo")
    assert found.priority is TaskPriority.HIGH
    assert found.status is TaskStatus.TODO
    assert found.assignee_id == assignee.id
    assert found.due_date == due


@pytest.mark.requires_db
async def test_update_bumps_version_and_checks_expected(db_session) -> None:
    """A write with the current version succeeds; a stale one matches no row."""
    creator, _ = await _seed_users(db_session)
    repo = TaskRepository(db_session)
    created = await repo.create(_task(creator.id))

    updated = await repo.update(
        created.id, {"status": TaskStatus.IN_PROGRESS}, expected_version=1
    )
    assert updated is not None
    assert updated.version == 2
    assert updated.status is TaskStatus.IN_PROGRESS

    stale = await repo.update(created.id, {"title": "Stale write"}, expected_version=1)
    assert stale is None
    assert (await repo.get_by_id(created.id)).title == "Repo task"


@pytest.mark.requires_db
async def test_update_missing_task_returns_none(db_session) -> None:
    repo = TaskRepository(db_session)
    assert await repo.update("no-such-task", {"title": "abc"}) is None


@pytest.mark.requires_db
async def test_filters_and_delete(db_session) -> None:
    """get_all combines filters; delete reports whether a row was removed."""
    creator, assignee = await _seed_users(db_session)
    repo = TaskRepository(db_session)
    match = await repo.create(
        _task(creator.id, assignee_id=assignee.id, status="review", tags=["api"])
    )
    await repo.create(_task(creator.id, status="review"))

    found = await repo.get_all(
        TaskFilter(project_id="repo-p", status=TaskStatus.REVIEW, tag="api")
    )
    assert [t.id for t in found] == [match.id]
    assert [t.id for t in await repo.get_by_assignee(assignee.id)] == [match.id]
    assert len(await repo.get_by_creator(creator.id)) == 2

    assert await repo.delete(match.id) is True
    assert await repo.delete(match.id) is False
    assert await repo.get_by_id(match.id) is None


@pytest.mark.requires_db
async def test_user_email_is_unique_case_insensitive(db_session) -> None:
    users = UserRepository(db_session)
    created = await users.create_user("Dup@Example.com", "Dee", "Dup")
    assert (await users.get_by_email("dup@example.com")).id == created.id
    with pytest.raises(DuplicateEmailException):
        await users.create_user("dup@example.com", "Dee", "Again")
