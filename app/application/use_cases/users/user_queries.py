"""Read-side user use cases."""

from __future__ import annotations

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserRepository
from app.application.use_cases.users._common import (
    load_user_or_raise,
    log_rejection,
    require_self_or_admin,
)
from app.domain.exceptions import AuthorizationException
from app.domain.value_objects.core import Actor


class GetUserUseCase:
    """Returns one user; admins see anyone, other callers only themselves."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(self, user_id: str, actor: Actor) -> UserResult:
        """Raises AuthorizationException or ResourceNotFoundException."""
        try:
            require_self_or_admin(actor, user_id, "view", "view this user")
        except AuthorizationException as exc:
            log_rejection("view", exc, user_id=user_id, actor_id=actor.id)
            raise
        return await load_user_or_raise(self.user_repo, user_id)


class ListUsersUseCase:
    """Lists users, newest first. Admin gating happens at the HTTP layer."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        return await self.user_repo.list_users(skip=skip, limit=limit)
