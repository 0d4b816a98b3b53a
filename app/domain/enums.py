"""Domain enumerations for the Taskboard application.

Enums represent fixed sets of domain values (task status, priority, user role).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Workflow stage of a task.

    Legal moves between stages are defined by TaskTransitionValidator.
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UserRole(_ValuesMixin, str, Enum):
    """Role of an authenticated user. Only ADMIN carries special task rights."""

    ADMIN = "admin"
    MANAGER = "manager"
    DEVELOPER = "developer"
    VIEWER = "viewer"
