"""Domain exceptions for the Taskboard application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskboardException(Exception):
    """Base exception for all Taskboard application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskboardException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        *,
        error_code: str = "VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            error_code: Overridden by subclasses with a more specific code.
            details: Optional extra context merged after field.
        """
        merged: dict[str, Any] = {"field": field} if field else {}
        if details:
            merged.update(details)
        super().__init__(message, error_code, merged)


class InvalidStatusTransitionException(ValidationException):
    """Raised when a task status change is not an edge of the workflow."""

    def __init__(
        self,
        current_status: str,
        requested_status: str,
        allowed_transitions: list[str],
    ) -> None:
        """Initialize with the rejected move and the legal alternatives.

        Args:
            current_status: Stored status of the task.
            requested_status: Status the caller asked for.
            allowed_transitions: Legal next statuses from current_status.
        """
        allowed = ", ".join(allowed_transitions) or "none"
        super().__init__(
            f"Invalid status transition from {current_status} to {requested_status}. "
            f"Valid transitions from {current_status}: {allowed}",
            field="status",
            error_code="INVALID_STATUS_TRANSITION",
            details={
                "current_status": current_status,
                "requested_status": requested_status,
                "allowed_transitions": allowed_transitions,
            },
        )


class AuthenticationException(TaskboardException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskboardException):
    """Raised when the actor lacks permission for the requested operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task').
            action: Optional action that was attempted (e.g. 'update', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action and message == "Permission denied":
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskboardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'assignee').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(TaskboardException):
    """Raised when a write collides with existing state (unique key, stale version)."""

    def __init__(
        self,
        message: str,
        error_code: str = "CONFLICT",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class DuplicateEmailException(ConflictException):
    """Raised when creating a user with an email that is already registered."""

    def __init__(self, email: str) -> None:
        """Initialize with the duplicate email.

        Args:
            email: The email that already exists.
        """
        super().__init__(
            "Email is already registered",
            "DUPLICATE_EMAIL",
            {"email": email},
        )


class TaskVersionConflictException(ConflictException):
    """Raised when a concurrent request changed the task between read and write (optimistic lock)."""

    def __init__(self, task_id: str, expected_version: int) -> None:
        super().__init__(
            "Task was updated by another request; retry.",
            "TASK_VERSION_CONFLICT",
            {
                "task_id": task_id,
                "expected_version": expected_version,
                "retryable": True,
            },
        )


class SqlNotConfiguredException(TaskboardException):
    """Raised when an operation requires Postgres but DATABASE_URL is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
