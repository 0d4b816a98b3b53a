"""get_db_transactional commit/rollback hooks and the request notification scheduler."""

from types import SimpleNamespace

import pytest

from app.api.v1.dependencies.task import get_notification_scheduler
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.use_cases.tasks import AssignTaskUseCase
from app.infrastructure.persistence import database


class _RecordingTransaction:
    def __init__(self, events: list) -> None:
        self.events = events

    async def __aenter__(self) -> "_RecordingTransaction":
        self.events.append("begin")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.events.append("rollback" if exc_type else "commit")
        return False


class _RecordingSession:
    def __init__(self, events: list) -> None:
        self.events = events
        self.info: dict = {}

    def begin(self) -> _RecordingTransaction:
        return _RecordingTransaction(self.events)

    async def __aenter__(self) -> "_RecordingSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.events.append("close")
        return False


@pytest.fixture
def events(monkeypatch) -> list:
    recorded: list = []
    monkeypatch.setattr(
        database, "_session_factory", lambda: lambda: _RecordingSession(recorded)
    )
    return recorded


async def test_hook_runs_after_commit(events) -> None:
    gen = database.get_db_transactional()
    session = await gen.__anext__()
    database.add_transaction_hook(session, lambda committed: events.append(("hook", committed)))
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()
    assert events == ["begin", "commit", ("hook", True), "close"]


async def test_hook_sees_rollback(events) -> None:
    gen = database.get_db_transactional()
    session = await gen.__anext__()
    database.add_transaction_hook(session, lambda committed: events.append(("hook", committed)))
    with pytest.raises(RuntimeError, match="boom"):
        await gen.athrow(RuntimeError("boom"))
    assert events == ["begin", "rollback", ("hook", False), "close"]


async def test_hooks_run_once(events) -> None:
    gen = database.get_db_transactional()
    session = await gen.__anext__()
    database.add_transaction_hook(session, lambda committed: events.append("hook"))
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()
    assert events.count("hook") == 1
    assert database.TRANSACTION_HOOKS_KEY not in session.info


async def test_assignment_notice_waits_for_commit(
    task_repo, user_repo, notifier, make_task
) -> None:
    session = SimpleNamespace(info={})
    dispatcher = NotificationDispatcher()
    scheduler = get_notification_scheduler(session, dispatcher)
    task = await make_task()

    await AssignTaskUseCase(task_repo, user_repo, notifier, scheduler).execute(
        task.id, "u-assignee"
    )
    await dispatcher.drain(timeout=1.0)
    assert notifier.calls == []

    database._end_transaction(session, committed=True)
    await dispatcher.drain(timeout=1.0)
    assert notifier.calls == [(task.id, "u-assignee")]


async def test_assignment_notice_dropped_on_rollback(
    task_repo, user_repo, notifier, make_task
) -> None:
    session = SimpleNamespace(info={})
    dispatcher = NotificationDispatcher()
    scheduler = get_notification_scheduler(session, dispatcher)
    task = await make_task()

    await AssignTaskUseCase(task_repo, user_repo, notifier, scheduler).execute(
        task.id, "u-assignee"
    )
    database._end_transaction(session, committed=False)
    await dispatcher.drain(timeout=1.0)
    assert notifier.calls == []
