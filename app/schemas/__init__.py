"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.task import (
    TaskAssignRequest,
    TaskCreateRequest,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)
from app.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    TokenResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "ChangePasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "ReadinessResponse",
    "TaskAssignRequest",
    "TaskCreateRequest",
    "TaskResponse",
    "TaskStatusUpdateRequest",
    "TaskUpdateRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
