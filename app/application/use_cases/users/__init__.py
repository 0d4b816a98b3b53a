"""User use cases: sign-up, login, profile reads and updates, password change, delete."""

from app.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from app.application.use_cases.users.change_password import ChangePasswordUseCase
from app.application.use_cases.users.create_user import CreateUserUseCase
from app.application.use_cases.users.delete_user import DeleteUserUseCase
from app.application.use_cases.users.update_user import UpdateUserUseCase
from app.application.use_cases.users.user_queries import GetUserUseCase, ListUsersUseCase

__all__ = [
    "AuthenticateUserUseCase",
    "ChangePasswordUseCase",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
]
