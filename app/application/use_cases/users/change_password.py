"""Password change use case."""

from __future__ import annotations

from app.application.interfaces.repositories import IUserRepository
from app.application.use_cases.users._common import (
    load_user_or_raise,
    log_rejection,
    require_self_or_admin,
)
from app.domain.entities.user import validate_password
from app.domain.exceptions import TaskboardException, ValidationException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ChangePasswordUseCase:
    """Replaces a user's password after checking the current one."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
        actor: Actor,
    ) -> None:
        """Change the password of user_id.

        The current password is required for every caller, admins included.

        Raises:
            AuthorizationException: Actor is neither the user nor an admin.
            ResourceNotFoundException: User does not exist.
            ValidationException: Weak new password, wrong current password,
                or new password equal to the current one.
        """
        try:
            require_self_or_admin(
                actor, user_id, "change_password", "change this user's password"
            )
            validate_password(new_password, field="new_password")
            if new_password == current_password:
                raise ValidationException(
                    "New password must differ from the current password",
                    field="new_password",
                )
            await load_user_or_raise(self.user_repo, user_id)
            if not await self.user_repo.check_password(user_id, current_password):
                raise ValidationException(
                    "Current password is incorrect", field="current_password"
                )
            await self.user_repo.update_password(user_id, new_password)
        except TaskboardException as exc:
            log_rejection("password change", exc, user_id=user_id, actor_id=actor.id)
            raise
        logger.info("Password changed user_id=%s actor_id=%s", user_id, actor.id)
