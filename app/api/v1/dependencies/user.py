"""User use cases (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.task import get_user_repo
from app.application.interfaces.repositories import IUserRepository
from app.application.use_cases.users import (
    AuthenticateUserUseCase,
    ChangePasswordUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)

UserRepo = Annotated[IUserRepository, Depends(get_user_repo)]


def get_create_user_use_case(user_repo: UserRepo) -> CreateUserUseCase:
    return CreateUserUseCase(user_repo)


def get_authenticate_user_use_case(user_repo: UserRepo) -> AuthenticateUserUseCase:
    return AuthenticateUserUseCase(user_repo)


def get_get_user_use_case(user_repo: UserRepo) -> GetUserUseCase:
    return GetUserUseCase(user_repo)


def get_list_users_use_case(user_repo: UserRepo) -> ListUsersUseCase:
    return ListUsersUseCase(user_repo)


def get_update_user_use_case(user_repo: UserRepo) -> UpdateUserUseCase:
    return UpdateUserUseCase(user_repo)


def get_change_password_use_case(user_repo: UserRepo) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(user_repo)


def get_delete_user_use_case(user_repo: UserRepo) -> DeleteUserUseCase:
    return DeleteUserUseCase(user_repo)
