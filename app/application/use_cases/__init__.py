"""Application use cases: one entry point per workflow."""

from app.application.use_cases.tasks import (
    AssignTaskUseCase,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    TaskQueryService,
    UpdateTaskStatusUseCase,
    UpdateTaskUseCase,
)
from app.application.use_cases.users import (
    AuthenticateUserUseCase,
    ChangePasswordUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "AssignTaskUseCase",
    "AuthenticateUserUseCase",
    "ChangePasswordUseCase",
    "CreateTaskUseCase",
    "CreateUserUseCase",
    "DeleteTaskUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "TaskQueryService",
    "UpdateTaskStatusUseCase",
    "UpdateTaskUseCase",
    "UpdateUserUseCase",
]
