"""Task API schemas.

Request models check JSON types only; field rules (lengths, tag limits,
future due dates, enum values) are enforced by the domain so every client
gets the same 400 messages.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCreateRequest(BaseModel):
    """Request body for creating a task. created_by is honoured for admins only."""

    model_config = ConfigDict(extra="forbid")

    title: str
    project_id: str
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: datetime | None = None
    assignee_id: str | None = None
    tags: list[str] | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None
    created_by: str | None = None


class TaskUpdateRequest(BaseModel):
    """Request body for a partial update. Only fields sent are changed; null clears nullable fields."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: datetime | None = None
    assignee_id: str | None = None
    project_id: str | None = None
    tags: list[str] | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None


class TaskStatusUpdateRequest(BaseModel):
    """Request body for PATCH /tasks/{id}/status."""

    status: str = Field(..., description="todo, in_progress, review or done")
    comment: str | None = Field(default=None, max_length=1000)


class TaskAssignRequest(BaseModel):
    """Request body for PATCH /tasks/{id}/assign."""

    assignee_id: str
    notify: bool = True


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: str
    priority: str
    due_date: datetime | None = None
    project_id: str
    assignee_id: str | None = None
    created_by: str
    tags: list[str]
    estimated_hours: float
    actual_hours: float
    created_at: datetime
    updated_at: datetime
    version: int

    @field_validator("status", "priority", mode="before")
    @classmethod
    def _enum_to_str(cls, v: Enum | str) -> str:
        """Accept TaskStatus/TaskPriority from the entity; serialize to str for JSON."""
        return v.value if isinstance(v, Enum) else v

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_to_list(cls, v: tuple[str, ...] | list[str]) -> list[str]:
        return list(v)
