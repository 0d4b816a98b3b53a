"""DTOs for task queries (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, fields

from app.domain.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskFilter:
    """Equality filters for listing tasks. None means "do not filter on this field".

    tag matches tasks whose tags contain the value.
    """

    project_id: str | None = None
    assignee_id: str | None = None
    created_by: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    tag: str | None = None

    def active(self) -> dict[str, object]:
        """Return only the filters that are set (field name to value)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
