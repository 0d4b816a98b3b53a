"""Fire-and-forget dispatch of notification coroutines.

Callers schedule a coroutine and return immediately; the dispatcher keeps a
reference to each running task until it finishes, logs failures, and never
lets them reach the caller. drain() is awaited on application shutdown.
PostCommitNotifications defers dispatch until the request transaction commits.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class NotificationDispatcher:
    """Schedules notification coroutines in the background (one per call)."""

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = enabled
        self._pending: set[asyncio.Task[Any]] = set()

    @property
    def pending_count(self) -> int:
        """Number of notifications scheduled but not finished."""
        return len(self._pending)

    def dispatch(self, coro: Coroutine[Any, Any, Any], *, label: str) -> None:
        """Schedule coro; returns without waiting. Failures are logged by label."""
        if not self.enabled:
            coro.close()
            logger.debug("Notifications disabled, dropped label=%s", label)
            return
        task = asyncio.create_task(self._run(coro, label), name=f"notify:{label}")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run(self, coro: Coroutine[Any, Any, Any], label: str) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            logger.warning("Notification cancelled label=%s", label)
            raise
        except Exception:
            # A notification failure never fails the operation that triggered it.
            logger.exception("Notification failed label=%s", label)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for pending notifications; cancel whatever is left after timeout."""
        if not self._pending:
            return
        pending = set(self._pending)
        logger.info("Draining %d pending notification(s)", len(pending))
        _, still_running = await asyncio.wait(pending, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
            logger.warning(
                "Cancelled %d notification(s) after drain timeout=%s",
                len(still_running),
                timeout,
            )


class PostCommitNotifications:
    """Holds notices raised during one unit of work until it ends.

    finish(committed=True) hands every queued coroutine to the dispatcher;
    finish(committed=False) closes them unrun.
    """

    def __init__(self, dispatcher: NotificationDispatcher) -> None:
        self.dispatcher = dispatcher
        self._queued: list[tuple[Coroutine[Any, Any, Any], str]] = []

    @property
    def queued_count(self) -> int:
        return len(self._queued)

    def dispatch(self, coro: Coroutine[Any, Any, Any], *, label: str) -> None:
        """Queue coro until the surrounding transaction ends."""
        self._queued.append((coro, label))

    def finish(self, committed: bool) -> None:
        """Release queued notices to the dispatcher, or drop them after a rollback."""
        queued, self._queued = self._queued, []
        if committed:
            for coro, label in queued:
                self.dispatcher.dispatch(coro, label=label)
            return
        for coro, label in queued:
            coro.close()
        if queued:
            logger.info(
                "Dropped %d notification(s) after rollback labels=%s",
                len(queued),
                ",".join(label for _, label in queued),
            )
