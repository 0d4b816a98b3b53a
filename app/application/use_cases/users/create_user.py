"""User creation use case (sign-up and admin-created accounts)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserRepository
from app.application.use_cases.users._common import log_rejection
from app.domain.entities.user import SELF_SERVICE_ROLES, normalize_user_fields
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthorizationException,
    DuplicateEmailException,
    TaskboardException,
    ValidationException,
)
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_REQUIRED_ON_CREATE = ("email", "password", "first_name", "last_name")


class CreateUserUseCase:
    """Creates a user account: validate, reject taken emails, persist (password hashed by the repo)."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(
        self, data: Mapping[str, Any], actor: Actor | None = None
    ) -> UserResult:
        """Create and persist a user.

        Without an admin actor only the developer and viewer roles may be
        requested; role defaults to developer.

        Raises:
            ValidationException: Missing or invalid field.
            AuthorizationException: Non-admin asked for the admin or manager role.
            DuplicateEmailException: Email already registered.
        """
        actor_id = actor.id if actor else None
        try:
            props = normalize_user_fields(data)
            missing = [name for name in _REQUIRED_ON_CREATE if name not in props]
            if missing:
                raise ValidationException(
                    "Email, password, first_name and last_name are required",
                    field=missing[0],
                    details={"missing": missing},
                )
            role: UserRole = props.get("role", UserRole.DEVELOPER)
            if role not in SELF_SERVICE_ROLES and not (actor and actor.is_admin):
                raise AuthorizationException(
                    resource="user",
                    action="create",
                    message="Only administrators can create admin or manager accounts",
                )
            if await self.user_repo.get_by_email(props["email"]) is not None:
                raise DuplicateEmailException(props["email"])
            created = await self.user_repo.create_user(
                props["email"],
                props["first_name"],
                props["last_name"],
                role,
                password=props["password"],
                is_active=props.get("is_active", True),
            )
        except TaskboardException as exc:
            log_rejection("create", exc, user_id=None, actor_id=actor_id)
            raise

        logger.info(
            "User created user_id=%s role=%s actor_id=%s",
            created.id,
            created.role.value,
            actor_id,
        )
        return created
