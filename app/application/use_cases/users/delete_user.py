"""User deletion use case."""

from __future__ import annotations

from app.application.interfaces.repositories import IUserRepository
from app.application.use_cases.users._common import log_rejection
from app.domain.exceptions import TaskboardException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class DeleteUserUseCase:
    """Deletes a user account. Admin gating happens at the HTTP layer."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(self, user_id: str, actor: Actor) -> bool:
        """Delete the user. Returns whether a record was removed.

        Raises:
            ConflictException: The user still has tasks they created.
        """
        try:
            deleted = await self.user_repo.delete_user(user_id)
        except TaskboardException as exc:
            log_rejection("delete", exc, user_id=user_id, actor_id=actor.id)
            raise
        logger.info("User deleted user_id=%s actor_id=%s removed=%s", user_id, actor.id, deleted)
        return deleted
