"""Task permission evaluation: who may update, move, or delete a task.

Three distinct rules:

* general update: admin, creator, or the assignee when the change touches
  status only;
* status change (dedicated endpoint): admin, creator, or assignee;
* delete: admin or creator.

can_* methods return a bool; require_* methods raise AuthorizationException.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities.task import TaskEntity
from app.domain.exceptions import AuthorizationException
from app.domain.value_objects.core import Actor

_STATUS_ONLY: frozenset[str] = frozenset({"status"})


class TaskPermissionEvaluator:
    """Stateless permission rules for task operations."""

    def can_update(
        self, task: TaskEntity, actor: Actor, changed_fields: Iterable[str]
    ) -> bool:
        """Return True if actor may apply a change touching changed_fields.

        Precedence: admin, then creator, then assignee with a status-only change.
        """
        if actor.is_admin:
            return True
        if task.is_created_by(actor.id):
            return True
        return task.is_assigned_to(actor.id) and frozenset(changed_fields) == _STATUS_ONLY

    def require_update(
        self, task: TaskEntity, actor: Actor, changed_fields: Iterable[str]
    ) -> None:
        """Raise AuthorizationException if actor may not apply the change."""
        if not self.can_update(task, actor, changed_fields):
            raise AuthorizationException(
                resource="task",
                action="update",
                message="You do not have permission to update this task",
            )

    def can_change_status(self, task: TaskEntity, actor: Actor) -> bool:
        """Return True if actor is admin, creator, or assignee."""
        return (
            actor.is_admin
            or task.is_created_by(actor.id)
            or task.is_assigned_to(actor.id)
        )

    def require_status_change(self, task: TaskEntity, actor: Actor) -> None:
        """Raise AuthorizationException if actor may not move the task's status."""
        if not self.can_change_status(task, actor):
            raise AuthorizationException(
                resource="task",
                action="update_status",
                message="You do not have permission to update this task status",
            )

    def can_delete(self, task: TaskEntity, actor: Actor) -> bool:
        """Return True if actor is admin or creator. Assignees never delete."""
        return actor.is_admin or task.is_created_by(actor.id)

    def require_delete(self, task: TaskEntity, actor: Actor) -> None:
        """Raise AuthorizationException if actor may not delete the task."""
        if not self.can_delete(task, actor):
            raise AuthorizationException(
                resource="task",
                action="delete",
                message="You do not have permission to delete this task",
            )
