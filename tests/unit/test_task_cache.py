"""TaskCache and cached TaskQueryService tests against an in-memory cache."""

from datetime import timedelta

from app.application.dtos.task import TaskFilter
from app.application.services.task_cache import (
    TaskCache,
    task_from_cached,
    task_key,
    task_list_key,
    task_to_cached,
)
from app.application.use_cases.tasks import (
    AssignTaskUseCase,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    TaskQueryService,
    UpdateTaskStatusUseCase,
    UpdateTaskUseCase,
)
from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.value_objects.core import Actor
from app.shared.utils.datetime import utc_now


def test_list_key_ignores_filter_order() -> None:
    a = TaskFilter(project_id="p-1", status=TaskStatus.TODO)
    b = TaskFilter(status=TaskStatus.TODO, project_id="p-1")
    assert task_list_key(a) == task_list_key(b) == "task:list:project_id=p-1&status=todo"
    assert task_list_key(None) == task_list_key(TaskFilter()) == "task:list:all"
    assert task_key("t1") == "task:id:t1"


async def test_cached_dict_rebuilds_equal_task(make_task) -> None:
    task = await make_task(
        tags=("api", "ops"),
        priority=TaskPriority.HIGH,
        due_date=utc_now() + timedelta(days=2),
    )
    assert task_from_cached(task_to_cached(task)) == task


async def test_get_task_miss_then_hit(task_repo, make_task, cache, task_cache) -> None:
    task = await make_task()
    svc = TaskQueryService(task_repo, task_cache)

    assert await svc.get_task(task.id) == task
    assert task_key(task.id) in cache.store

    task_repo.tasks.clear()
    assert await svc.get_task(task.id) == task


async def test_list_miss_then_hit(task_repo, make_task, cache, task_cache) -> None:
    first = await make_task(project_id="p-1")
    svc = TaskQueryService(task_repo, task_cache)
    assert await svc.list_by_project("p-1") == [first]

    await make_task(project_id="p-1")
    assert await svc.list_by_project("p-1") == [first]
    assert cache.sets.count(task_list_key(TaskFilter(project_id="p-1"))) == 1


async def test_empty_listing_is_cached(task_repo, cache, task_cache) -> None:
    svc = TaskQueryService(task_repo, task_cache)
    assert await svc.list_by_status(TaskStatus.DONE) == []
    assert cache.store[task_list_key(TaskFilter(status=TaskStatus.DONE))] == "[]"


async def test_unavailable_cache_reads_repo(task_repo, make_task, cache, task_cache) -> None:
    cache.available = False
    task = await make_task()
    svc = TaskQueryService(task_repo, task_cache)
    assert await svc.get_task(task.id) == task
    assert await svc.list_tasks() == [task]
    assert cache.store == {}
    assert cache.gets == []


async def test_unreadable_entry_falls_back_to_repo(
    task_repo, make_task, cache, task_cache
) -> None:
    task = await make_task()
    cache.store[task_key(task.id)] = '{"id": "x"}'
    assert await TaskQueryService(task_repo, task_cache).get_task(task.id) == task


async def test_invalidate_drops_task_and_listings(make_task, cache, task_cache) -> None:
    task = await make_task()
    other = await make_task()
    await task_cache.put_task(task)
    await task_cache.put_task(other)
    await task_cache.put_list(None, [task, other])
    await task_cache.put_list(TaskFilter(project_id="p-1"), [task, other])

    await task_cache.invalidate(task.id)

    assert set(cache.store) == {task_key(other.id)}


async def test_create_invalidates_listings(task_repo, user_repo, cache, task_cache) -> None:
    svc = TaskQueryService(task_repo, task_cache)
    assert await svc.list_tasks() == []

    created = await CreateTaskUseCase(task_repo, user_repo, cache=task_cache).execute(
        {"title": "Plan sprint", "project_id": "p-1"}, Actor("u-creator", UserRole.DEVELOPER)
    )

    assert await svc.list_tasks() == [created]


async def test_every_write_invalidates_the_cached_task(
    task_repo, user_repo, make_task, cache, task_cache
) -> None:
    task = await make_task(created_by="u-creator")
    svc = TaskQueryService(task_repo, task_cache)
    creator = Actor("u-creator", UserRole.DEVELOPER)

    await svc.get_task(task.id)
    await UpdateTaskUseCase(task_repo, user_repo, cache=task_cache).execute(
        task.id, {"title": "Renamed task"}, creator
    )
    assert (await svc.get_task(task.id)).title == "Renamed task"

    await UpdateTaskStatusUseCase(task_repo, cache=task_cache).execute(
        task.id, "in_progress", creator
    )
    assert (await svc.get_task(task.id)).status is TaskStatus.IN_PROGRESS

    await AssignTaskUseCase(task_repo, user_repo, cache=task_cache).execute(
        task.id, "u-assignee"
    )
    assert (await svc.get_task(task.id)).assignee_id == "u-assignee"

    assert await svc.list_assigned_to("u-assignee") != []
    await DeleteTaskUseCase(task_repo, cache=task_cache).execute(task.id, creator)
    assert task_key(task.id) not in cache.store
    assert await svc.list_assigned_to("u-assignee") == []
