"""Validates task status changes against the workflow transition table."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from app.domain.enums import TaskStatus
from app.domain.exceptions import InvalidStatusTransitionException

# Legal next statuses per status, in the order they are reported to callers.
# Self-transitions are deliberately absent; DONE can be reopened.
TASK_STATUS_TRANSITIONS: Mapping[TaskStatus, tuple[TaskStatus, ...]] = MappingProxyType(
    {
        TaskStatus.TODO: (TaskStatus.IN_PROGRESS, TaskStatus.REVIEW),
        TaskStatus.IN_PROGRESS: (TaskStatus.REVIEW, TaskStatus.TODO),
        TaskStatus.REVIEW: (TaskStatus.DONE, TaskStatus.IN_PROGRESS),
        TaskStatus.DONE: (TaskStatus.TODO, TaskStatus.IN_PROGRESS),
    }
)


class TaskTransitionValidator:
    """Checks status transitions; pure, holds no state beyond the table."""

    def __init__(
        self,
        transitions: Mapping[TaskStatus, tuple[TaskStatus, ...]] = TASK_STATUS_TRANSITIONS,
    ) -> None:
        self._transitions = transitions

    def allowed_transitions(self, current: TaskStatus) -> tuple[TaskStatus, ...]:
        """Return the legal next statuses for current (empty if none)."""
        return self._transitions.get(current, ())

    def can_transition(self, current: TaskStatus, requested: TaskStatus) -> bool:
        """Return True if requested is a legal next status of current."""
        return requested in self.allowed_transitions(current)

    def validate_transition(self, current: TaskStatus, requested: TaskStatus) -> None:
        """Raise InvalidStatusTransitionException if requested is not reachable from current.

        The exception message and details enumerate the legal next statuses.
        """
        if self.can_transition(current, requested):
            return
        raise InvalidStatusTransitionException(
            current_status=current.value,
            requested_status=requested.value,
            allowed_transitions=[s.value for s in self.allowed_transitions(current)],
        )
