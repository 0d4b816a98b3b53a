"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.task import TaskFilter
    from app.application.dtos.user import UserResult
    from app.domain.entities.task import TaskEntity
    from app.domain.enums import TaskPriority, TaskStatus, UserRole


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task repository (DIP). One implementation per storage backend."""

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        """Return task by ID, or None."""

    async def get_all(self, filters: TaskFilter | None = None) -> list[TaskEntity]:
        """Return tasks matching all set equality filters (all tasks when None)."""

    async def get_by_project(self, project_id: str) -> list[TaskEntity]:
        """Return tasks of a project."""

    async def get_by_assignee(self, user_id: str) -> list[TaskEntity]:
        """Return tasks assigned to a user."""

    async def get_by_creator(self, user_id: str) -> list[TaskEntity]:
        """Return tasks created by a user."""

    async def get_by_status(self, status: TaskStatus) -> list[TaskEntity]:
        """Return tasks in a status."""

    async def get_by_priority(self, priority: TaskPriority) -> list[TaskEntity]:
        """Return tasks with a priority."""

    async def create(self, task: TaskEntity) -> TaskEntity:
        """Persist a new task and return it as stored. Raises on write failure."""

    async def update(
        self,
        task_id: str,
        changes: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> TaskEntity | None:
        """Apply changes and bump version; return the stored task.

        When expected_version is given the write only happens if the stored
        version still matches. Returns None if no row matched (absent or stale).
        """

    async def delete(self, task_id: str) -> bool:
        """Delete task; return True if a record was removed."""


# User repository interface (accounts, existence checks, notification recipients)
class IUserRepository(Protocol):
    """Protocol for user persistence (DIP). Passwords are hashed by the implementation."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID, or None."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return user by email, or None."""

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        """Return users, newest first, paginated."""

    async def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: UserRole = ...,
        *,
        password: str | None = None,
        is_active: bool = True,
    ) -> UserResult:
        """Insert a user (password hashed when given).

        Raises DuplicateEmailException when the email is taken.
        """

    async def update_user(
        self, user_id: str, changes: Mapping[str, Any]
    ) -> UserResult | None:
        """Apply profile changes; return the stored user or None if absent.

        Raises DuplicateEmailException when a new email is taken.
        """

    async def delete_user(self, user_id: str) -> bool:
        """Delete user; return True if a record was removed.

        Raises ConflictException while the user still owns tasks.
        """

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user whose email and password match, else None."""

    async def check_password(self, user_id: str, password: str) -> bool:
        """Return True if password matches the user's stored password."""

    async def update_password(self, user_id: str, new_password: str) -> bool:
        """Replace the user's password; return False if the user does not exist."""
