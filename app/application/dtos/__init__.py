"""Application DTOs: read models and query inputs shared by use cases and repositories."""

from app.application.dtos.task import TaskFilter
from app.application.dtos.user import UserResult

__all__ = [
    "TaskFilter",
    "UserResult",
]
