"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.domain.entities.task import TaskEntity


# Notification service interface (email or log sink)
class INotificationService(Protocol):
    """Protocol for sending notifications (e.g. email) to a list of recipients."""

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Send notification (e.g. email) to the given addresses. No-op or log if not configured."""


# Task notifier interface (side channel triggered by task state changes)
class ITaskNotifier(Protocol):
    """Protocol for task side-channel notifications. Callers never depend on success."""

    async def notify_task_assigned(self, task: TaskEntity, assignee: UserResult) -> None:
        """Tell the assignee that the task was assigned to them."""


# Notification scheduler interface (background delivery of notices)
class INotificationScheduler(Protocol):
    """Protocol for running notification coroutines off the request path."""

    def dispatch(self, coro: Coroutine[Any, Any, Any], *, label: str) -> None:
        """Take ownership of coro and run it later; never raises for a failed notice."""


# Cache service interface
class ICacheService(Protocol):
    """Minimal cache protocol for task read caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""
