"""Task domain entity.

Represents one work item, independent of persistence. The entity is a
frozen value: update, change_status and assign_to return a new instance and
leave the original untouched. Transition and permission rules are enforced
by the use cases, not here.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from app.domain.enums import TaskPriority, TaskStatus
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000
MAX_TAGS = 10
TAG_MAX_LENGTH = 50

DEFAULT_ESTIMATED_HOURS = 1.0
DEFAULT_ACTUAL_HOURS = 0.0

# Fields a caller may change after creation.
MUTABLE_TASK_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "assignee_id",
        "project_id",
        "tags",
        "estimated_hours",
        "actual_hours",
    }
)
IMMUTABLE_TASK_FIELDS: frozenset[str] = frozenset(
    {"id", "created_by", "created_at", "updated_at", "version"}
)
_CREATE_FIELDS = MUTABLE_TASK_FIELDS | {"created_by"}
_REQUIRED_ON_CREATE = ("title", "project_id", "created_by")

E = TypeVar("E", bound=Enum)


def _coerce_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise ValidationException(
            f"Invalid {field_name}. Must be one of: {valid}", field=field_name
        ) from None


def _check_title(value: Any) -> str:
    if not isinstance(value, str) or not (
        TITLE_MIN_LENGTH <= len(value) <= TITLE_MAX_LENGTH
    ):
        raise ValidationException(
            f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters",
            field="title",
        )
    return value


def _check_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationException("Description must be a string", field="description")
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValidationException(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )
    return value


def _check_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationException("Tags must be a list of strings", field="tags")
    if len(value) > MAX_TAGS:
        raise ValidationException(f"Maximum {MAX_TAGS} tags allowed", field="tags")
    for index, tag in enumerate(value):
        if not isinstance(tag, str):
            raise ValidationException(
                f"Tag at position {index} must be a string", field="tags"
            )
        if len(tag) > TAG_MAX_LENGTH:
            raise ValidationException(
                f"Tag at position {index} must be at most {TAG_MAX_LENGTH} characters",
                field="tags",
            )
    return tuple(value)


def _check_hours(value: Any, field_name: str, *, allow_zero: bool) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationException(f"{field_name} must be a number", field=field_name)
    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise ValidationException(f"{field_name} must be {bound}", field=field_name)
    return float(value)


def _check_identifier(value: Any, field_name: str, *, nullable: bool) -> str | None:
    if value is None and nullable:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{field_name} must be a non-empty string", field=field_name)
    return value


def _check_due_date(value: Any) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise ValidationException("Due date must be a datetime", field="due_date")
    return ensure_utc(value)


def normalize_task_fields(values: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and coerce the task fields present in values.

    Only keys in MUTABLE_TASK_FIELDS are accepted. Status and priority strings
    are coerced to their enums, tag lists to tuples, hours to float. The same
    rules apply at creation and to partial updates.

    Args:
        values: Field name to raw value (subset of MUTABLE_TASK_FIELDS).

    Returns:
        New dict with the same keys and normalized values.

    Raises:
        ValidationException: Unknown field or constraint violated.
    """
    unknown = sorted(set(values) - MUTABLE_TASK_FIELDS)
    if unknown:
        raise ValidationException(
            f"Unknown or read-only task field(s): {', '.join(unknown)}",
            field=unknown[0],
        )
    out: dict[str, Any] = {}
    for name, value in values.items():
        if name == "title":
            out[name] = _check_title(value)
        elif name == "description":
            out[name] = _check_description(value)
        elif name == "status":
            out[name] = _coerce_enum(TaskStatus, value, "status")
        elif name == "priority":
            out[name] = _coerce_enum(TaskPriority, value, "priority")
        elif name == "due_date":
            out[name] = _check_due_date(value)
        elif name == "assignee_id":
            out[name] = _check_identifier(value, name, nullable=True)
        elif name == "project_id":
            out[name] = _check_identifier(value, name, nullable=False)
        elif name == "tags":
            out[name] = _check_tags(value)
        elif name == "estimated_hours":
            out[name] = _check_hours(value, name, allow_zero=False)
        elif name == "actual_hours":
            out[name] = _check_hours(value, name, allow_zero=True)
    return out


def ensure_due_date_in_future(due_date: datetime | None, now: datetime) -> None:
    """Raise ValidationException if due_date is set and not strictly after now."""
    if due_date is not None and ensure_utc(due_date) <= now:
        raise ValidationException("Due date must be in the future", field="due_date")


@dataclass(frozen=True)
class TaskEntity:
    """Domain entity for a task (SRP: business data separate from persistence).

    Validation runs on construction, so every instance (including the ones
    returned by update) satisfies the field constraints and
    updated_at >= created_at.
    """

    id: str
    title: str
    project_id: str
    created_by: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assignee_id: str | None = None
    tags: tuple[str, ...] = ()
    estimated_hours: float = DEFAULT_ESTIMATED_HOURS
    actual_hours: float = DEFAULT_ACTUAL_HOURS
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate task business rules and normalize field types. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Task ID is required", field="id")
        if not self.created_by:
            raise ValidationException("Task must have a creator", field="created_by")
        normalized = normalize_task_fields(
            {name: getattr(self, name) for name in MUTABLE_TASK_FIELDS}
        )
        # Frozen dataclass: coerce in place once, during construction only.
        for name, value in normalized.items():
            object.__setattr__(self, name, value)
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))
        if self.updated_at < self.created_at:
            raise ValidationException(
                "updated_at must not be earlier than created_at", field="updated_at"
            )
        if self.version < 1:
            raise ValidationException("version must be >= 1", field="version")

    @classmethod
    def create(
        cls, props: Mapping[str, Any], *, now: datetime | None = None
    ) -> "TaskEntity":
        """Build a new task with a generated id, fresh timestamps and defaults.

        Omitted (or None) optional fields get their defaults: status TODO,
        priority MEDIUM, no tags, estimated_hours 1, actual_hours 0.

        Args:
            props: Task fields; title, project_id and created_by are required.
            now: Creation time; defaults to utc_now().

        Returns:
            New TaskEntity (not persisted).

        Raises:
            ValidationException: Missing required field or constraint violated.
        """
        unknown = sorted(set(props) - _CREATE_FIELDS)
        if unknown:
            raise ValidationException(
                f"Unknown or read-only task field(s): {', '.join(unknown)}",
                field=unknown[0],
            )
        missing = [name for name in _REQUIRED_ON_CREATE if not props.get(name)]
        if missing:
            raise ValidationException(
                "Title, project_id, and created_by are required",
                field=missing[0],
                details={"missing": missing},
            )
        provided = {
            name: value
            for name, value in props.items()
            if value is not None and name != "created_by"
        }
        timestamp = now or utc_now()
        return cls(
            id=generate_cuid(),
            created_by=props["created_by"],
            created_at=timestamp,
            updated_at=timestamp,
            **normalize_task_fields(provided),
        )

    def update(
        self, changes: Mapping[str, Any], *, now: datetime | None = None
    ) -> "TaskEntity":
        """Return a new task with changes overlaid and updated_at refreshed.

        Does not check status transitions or permissions.

        Raises:
            ValidationException: An immutable field is named or a constraint is violated.
        """
        immutable = sorted(set(changes) & IMMUTABLE_TASK_FIELDS)
        if immutable:
            raise ValidationException(
                f"Field(s) cannot be changed: {', '.join(immutable)}",
                field=immutable[0],
            )
        normalized = normalize_task_fields(changes)
        timestamp = now or utc_now()
        return replace(
            self,
            **normalized,
            updated_at=max(timestamp, self.created_at),
        )

    def change_status(self, status: TaskStatus | str) -> "TaskEntity":
        """Return a new task with only status changed."""
        return self.update({"status": status})

    def assign_to(self, user_id: str | None) -> "TaskEntity":
        """Return a new task with only assignee_id changed."""
        return self.update({"assignee_id": user_id})

    def is_created_by(self, user_id: str) -> bool:
        """Return whether user_id is the task's creator."""
        return self.created_by == user_id

    def is_assigned_to(self, user_id: str) -> bool:
        """Return whether user_id is the task's current assignee."""
        return self.assignee_id is not None and self.assignee_id == user_id
