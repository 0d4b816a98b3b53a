"""User profile update use case."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserRepository
from app.application.use_cases.users._common import (
    load_user_or_raise,
    log_rejection,
    require_self_or_admin,
)
from app.domain.entities.user import normalize_user_fields
from app.domain.exceptions import (
    AuthorizationException,
    DuplicateEmailException,
    ResourceNotFoundException,
    TaskboardException,
    ValidationException,
)
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ADMIN_ONLY_USER_FIELDS = frozenset({"is_active", "password", "role"})


class UpdateUserUseCase:
    """Applies a partial profile update; users edit themselves, admins edit anyone."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(
        self, user_id: str, changes: Mapping[str, Any], actor: Actor
    ) -> UserResult:
        """Update the given fields of a user.

        Only admins may change role or is_active, or set a password here
        (users change their own through ChangePasswordUseCase).

        Raises:
            AuthorizationException: Not the user themself (or an admin), or a
                non-admin touched an admin-only field.
            ValidationException: Empty patch or invalid field.
            ResourceNotFoundException: User does not exist.
            DuplicateEmailException: New email belongs to another user.
        """
        try:
            require_self_or_admin(actor, user_id, "update", "update this user")
            if not changes:
                raise ValidationException("No fields to update")
            props = normalize_user_fields(changes)
            restricted = sorted(ADMIN_ONLY_USER_FIELDS & props.keys())
            if restricted and not actor.is_admin:
                raise AuthorizationException(
                    resource="user",
                    action="update",
                    message=f"Only administrators can change: {', '.join(restricted)}",
                )
            await load_user_or_raise(self.user_repo, user_id)
            if "email" in props:
                owner = await self.user_repo.get_by_email(props["email"])
                if owner is not None and owner.id != user_id:
                    raise DuplicateEmailException(props["email"])
            updated = await self.user_repo.update_user(user_id, props)
            if updated is None:
                raise ResourceNotFoundException("user", user_id)
        except TaskboardException as exc:
            log_rejection("update", exc, user_id=user_id, actor_id=actor.id)
            raise

        logger.info(
            "User updated user_id=%s actor_id=%s fields=%s",
            user_id,
            actor.id,
            ",".join(sorted(props)),
        )
        return updated
