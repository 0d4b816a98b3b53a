"""User API: sign-up, login, profile and password routes delegating to user use cases."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_authenticate_user_use_case,
    get_change_password_use_case,
    get_create_user_use_case,
    get_current_actor,
    get_current_actor_optional,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_user_use_case,
    require_roles,
)
from app.application.dtos.user import UserResult
from app.application.use_cases.users import (
    AuthenticateUserUseCase,
    ChangePasswordUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from app.core.config import get_settings
from app.core.limiter import limit_auth, limit_writes
from app.domain.enums import UserRole
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects.core import Actor
from app.infrastructure.security import create_access_token
from app.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    TokenResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()

_admin_only_list = require_roles("user", "list", UserRole.ADMIN)
_admin_only_delete = require_roles("user", "delete", UserRole.ADMIN)


def _to_response(user: UserResult) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        role=user.role.value,
        is_active=user.is_active,
    )


@router.post("", response_model=UserResponse, status_code=201)
@limit_auth
async def create_user(
    request: Request,
    body: UserCreateRequest,
    actor: Annotated[Actor | None, Depends(get_current_actor_optional)],
    use_case: Annotated[CreateUserUseCase, Depends(get_create_user_use_case)],
):
    """Sign up. Without an admin token only developer and viewer roles may be requested."""
    created = await use_case.execute(body.model_dump(exclude_none=True), actor)
    return _to_response(created)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    use_case: Annotated[AuthenticateUserUseCase, Depends(get_authenticate_user_use_case)],
):
    """Exchange email and password for a bearer token."""
    user = await use_case.execute(body.email, body.password)
    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        expires_in=get_settings().access_token_expire_minutes * 60,
        user=_to_response(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[GetUserUseCase, Depends(get_get_user_use_case)],
):
    """Profile of the caller."""
    return _to_response(await use_case.execute(actor.id, actor))


@router.get("", response_model=list[UserResponse])
async def list_users(
    actor: Annotated[Actor, Depends(_admin_only_list)],
    use_case: Annotated[ListUsersUseCase, Depends(get_list_users_use_case)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
):
    """List users, newest first (admins only)."""
    users = await use_case.execute(skip=skip, limit=limit)
    return [_to_response(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[GetUserUseCase, Depends(get_get_user_use_case)],
):
    """One user (the user themself or an admin)."""
    return _to_response(await use_case.execute(user_id, actor))


@router.put("/{user_id}", response_model=UserResponse)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdateRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[UpdateUserUseCase, Depends(get_update_user_use_case)],
):
    """Update profile fields that were sent. role and is_active need an admin."""
    updated = await use_case.execute(user_id, body.model_dump(exclude_none=True), actor)
    return _to_response(updated)


@router.patch("/{user_id}/password", status_code=204)
@limit_writes
async def change_password(
    request: Request,
    user_id: str,
    body: ChangePasswordRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    use_case: Annotated[ChangePasswordUseCase, Depends(get_change_password_use_case)],
) -> Response:
    """Replace the password after checking the current one."""
    await use_case.execute(user_id, body.current_password, body.new_password, actor)
    return Response(status_code=204)


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    actor: Annotated[Actor, Depends(_admin_only_delete)],
    use_case: Annotated[DeleteUserUseCase, Depends(get_delete_user_use_case)],
) -> Response:
    """Delete a user (admins only). 409 while the user still has tasks they created."""
    if not await use_case.execute(user_id, actor):
        raise ResourceNotFoundException("user", user_id)
    return Response(status_code=204)
