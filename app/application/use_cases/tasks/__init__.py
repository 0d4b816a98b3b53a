"""Task use cases: create, update, status change, assign, delete, queries."""

from app.application.use_cases.tasks.assign_task import AssignTaskUseCase
from app.application.use_cases.tasks.create_task import CreateTaskUseCase
from app.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from app.application.use_cases.tasks.task_queries import TaskQueryService
from app.application.use_cases.tasks.update_task import UpdateTaskUseCase
from app.application.use_cases.tasks.update_task_status import UpdateTaskStatusUseCase

__all__ = [
    "AssignTaskUseCase",
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "TaskQueryService",
    "UpdateTaskStatusUseCase",
    "UpdateTaskUseCase",
]
