"""Pytest configuration and fixtures for taskboard.

Unit and API tests run against in-memory fakes of the repository and
notifier protocols; only tests marked requires_db touch Postgres (via
DATABASE_URL, after `alembic upgrade head`). All imports use app.*.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-0123456789")

import fnmatch
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import (
    get_notification_scheduler,
    get_task_cache,
    get_task_notifier,
    get_task_repo,
    get_user_repo,
)
from app.application.dtos.task import TaskFilter
from app.application.dtos.user import UserResult
from app.application.services.notification_dispatcher import (
    NotificationDispatcher,
    PostCommitNotifications,
)
from app.application.services.task_cache import TaskCache
from app.core.limiter import limiter
from app.domain.entities.task import TaskEntity
from app.domain.enums import TaskPriority, TaskStatus, UserRole
from app.domain.exceptions import ConflictException, DuplicateEmailException
from app.infrastructure.persistence import database
from app.infrastructure.security.jwt import create_access_token
from app.main import app
from app.shared.utils.generators import generate_cuid

# Seeded users for the fake user repository: id -> role.
SEED_USERS: dict[str, UserRole] = {
    "u-admin": UserRole.ADMIN,
    "u-manager": UserRole.MANAGER,
    "u-creator": UserRole.DEVELOPER,
    "u-assignee": UserRole.DEVELOPER,
    "u-other": UserRole.DEVELOPER,
    "u-viewer": UserRole.VIEWER,
}

# Password of every seeded user in the fake user repository.
SEED_PASSWORD = "Sprint@Plan2024"

_SEEDED_ROLE = object()


class InMemoryTaskRepository:
    """ITaskRepository backed by a dict. Counts successful update() writes."""

    def __init__(self) -> None:
        self.tasks: dict[str, TaskEntity] = {}
        self.update_calls = 0

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        return self.tasks.get(task_id)

    async def get_all(self, filters: TaskFilter | None = None) -> list[TaskEntity]:
        active = filters.active() if filters else {}
        tag = active.pop("tag", None)
        out = [
            t
            for t in self.tasks.values()
            if all(getattr(t, name) == value for name, value in active.items())
            and (tag is None or tag in t.tags)
        ]
        return sorted(out, key=lambda t: t.created_at, reverse=True)

    async def get_by_project(self, project_id: str) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(project_id=project_id))

    async def get_by_assignee(self, user_id: str) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(assignee_id=user_id))

    async def get_by_creator(self, user_id: str) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(created_by=user_id))

    async def get_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(status=status))

    async def get_by_priority(self, priority: TaskPriority) -> list[TaskEntity]:
        return await self.get_all(TaskFilter(priority=priority))

    async def create(self, task: TaskEntity) -> TaskEntity:
        stored = replace(task, version=1)
        self.tasks[stored.id] = stored
        return stored

    async def update(
        self,
        task_id: str,
        changes: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> TaskEntity | None:
        current = self.tasks.get(task_id)
        if current is None:
            return None
        if expected_version is not None and current.version != expected_version:
            return None
        stored = replace(current, **changes, version=current.version + 1)
        self.tasks[task_id] = stored
        self.update_calls += 1
        return stored

    async def delete(self, task_id: str) -> bool:
        return self.tasks.pop(task_id, None) is not None


class FakeUserRepository:
    """IUserRepository over a dict. Passwords are kept in plain text by user id.

    Users in task_owners cannot be deleted (ConflictException), like rows
    referenced by tasks.created_by.
    """

    def __init__(
        self, users: list[UserResult], passwords: dict[str, str] | None = None
    ) -> None:
        self.users = {u.id: u for u in users}
        self.passwords: dict[str, str] = dict(passwords or {})
        self.task_owners: set[str] = set()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> UserResult | None:
        wanted = email.strip().lower()
        return next((u for u in self.users.values() if u.email == wanted), None)

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        newest_first = list(reversed(self.users.values()))
        return newest_first[skip : skip + limit]

    async def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.DEVELOPER,
        *,
        password: str | None = None,
        is_active: bool = True,
    ) -> UserResult:
        if await self.get_by_email(email) is not None:
            raise DuplicateEmailException(email)
        user = UserResult(
            id=generate_cuid(),
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=is_active,
        )
        self.users[user.id] = user
        if password is not None:
            self.passwords[user.id] = password
        return user

    async def update_user(
        self, user_id: str, changes: dict[str, Any]
    ) -> UserResult | None:
        current = self.users.get(user_id)
        if current is None:
            return None
        fields = dict(changes)
        password = fields.pop("password", None)
        if "email" in fields:
            owner = await self.get_by_email(fields["email"])
            if owner is not None and owner.id != user_id:
                raise DuplicateEmailException(fields["email"])
        if "role" in fields:
            fields["role"] = UserRole(fields["role"])
        self.users[user_id] = replace(current, **fields)
        if password is not None:
            self.passwords[user_id] = password
        return self.users[user_id]

    async def delete_user(self, user_id: str) -> bool:
        if user_id in self.task_owners:
            raise ConflictException(
                "User still has tasks they created", details={"user_id": user_id}
            )
        self.passwords.pop(user_id, None)
        return self.users.pop(user_id, None) is not None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        user = await self.get_by_email(email)
        if user is None or not user.is_active:
            return None
        return user if self.passwords.get(user.id) == password else None

    async def check_password(self, user_id: str, password: str) -> bool:
        return user_id in self.passwords and self.passwords[user_id] == password

    async def update_password(self, user_id: str, new_password: str) -> bool:
        if user_id not in self.users:
            return False
        self.passwords[user_id] = new_password
        return True


class FakeCache:
    """ICacheService over a dict. Values go through JSON like the Redis adapter."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.store: dict[str, Any] = {}
        self.gets: list[str] = []
        self.sets: list[str] = []
        self.deleted_patterns: list[str] = []

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any | None:
        self.gets.append(key)
        raw = self.store.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.sets.append(key)
        self.store[key] = json.dumps(value)
        return True

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def delete_pattern(self, pattern: str) -> int:
        self.deleted_patterns.append(pattern)
        matched = [k for k in self.store if fnmatch.fnmatchcase(k, pattern)]
        for key in matched:
            del self.store[key]
        return len(matched)


class RecordingNotifier:
    """ITaskNotifier that records (task_id, assignee_id) pairs."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def notify_task_assigned(self, task: TaskEntity, assignee: UserResult) -> None:
        self.calls.append((task.id, assignee.id))


class FailingNotifier:
    """ITaskNotifier that always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    async def notify_task_assigned(self, task: TaskEntity, assignee: UserResult) -> None:
        self.attempts += 1
        raise RuntimeError("mail transport down")


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository(
        [
            UserResult(
                id=user_id,
                email=f"{user_id.removeprefix('u-')}@example.com",
                first_name=user_id.removeprefix("u-").title(),
                last_name="Tester",
                role=role,
                is_active=True,
            )
            for user_id, role in SEED_USERS.items()
        ],
        passwords={user_id: SEED_PASSWORD for user_id in SEED_USERS},
    )


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def task_cache(cache: FakeCache) -> TaskCache:
    return TaskCache(cache, cache_ttl=60)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()


@pytest.fixture
def make_task(task_repo: InMemoryTaskRepository) -> Callable[..., Awaitable[TaskEntity]]:
    """Factory: store a task directly in task_repo (bypasses use cases)."""

    async def _make(
        *,
        created_by: str = "u-creator",
        assignee_id: str | None = None,
        status: TaskStatus = TaskStatus.TODO,
        title: str = "Write release notes",
        project_id: str = "p-1",
        due_date: datetime | None = None,
        **extra: Any,
    ) -> TaskEntity:
        task = TaskEntity(
            id=generate_cuid(),
            title=title,
            project_id=project_id,
            created_by=created_by,
            assignee_id=assignee_id,
            status=status,
            due_date=due_date,
            **extra,
        )
        return await task_repo.create(task)

    return _make


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Factory: Authorization header for user_id (role defaults to the seeded one)."""

    def _headers(user_id: str, role: Any = _SEEDED_ROLE) -> dict[str, str]:
        claim = SEED_USERS.get(user_id) if role is _SEEDED_ROLE else role
        return {"Authorization": f"Bearer {create_access_token(user_id, claim)}"}

    return _headers


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), no dependency overrides."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def api_task_cache() -> TaskCache | None:
    """Task cache the api_client wires in; None (no caching) unless a module overrides it."""
    return None


@pytest.fixture
async def api_client(
    task_repo: InMemoryTaskRepository,
    user_repo: FakeUserRepository,
    notifier: RecordingNotifier,
    api_task_cache: TaskCache | None,
) -> AsyncClient:
    """HTTP client with repositories, notifier and cache replaced by in-memory fakes.

    Notices are held per request and released when the request succeeds,
    the way get_notification_scheduler ties them to the commit.
    """

    async def _request_notices() -> AsyncIterator[PostCommitNotifications]:
        notices = PostCommitNotifications(app.state.notification_dispatcher)
        try:
            yield notices
        except BaseException:
            notices.finish(False)
            raise
        notices.finish(True)

    app.dependency_overrides[get_task_repo] = lambda: task_repo
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    app.dependency_overrides[get_task_notifier] = lambda: notifier
    app.dependency_overrides[get_task_cache] = lambda: api_task_cache
    app.dependency_overrides[get_notification_scheduler] = _request_notices
    app.state.notification_dispatcher = NotificationDispatcher()
    limiter.enabled = False
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
        await app.state.notification_dispatcher.drain(timeout=1.0)
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL and a migrated schema. Skips (pytest.skip) when no
    database is configured. Use @pytest.mark.requires_db on tests that need
    this fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()
