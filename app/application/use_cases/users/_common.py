"""Helpers shared by the user use cases: the self-or-admin rule and rejection logging."""

from __future__ import annotations

from app.application.use_cases.tasks._common import load_user_or_raise
from app.domain.exceptions import AuthorizationException, TaskboardException
from app.domain.value_objects.core import Actor
from app.shared.telemetry.logging import get_logger, log_context

logger = get_logger(__name__)

__all__ = ["load_user_or_raise", "log_rejection", "require_self_or_admin"]


def require_self_or_admin(actor: Actor, user_id: str, action: str, verb: str) -> None:
    """Raise AuthorizationException unless actor is an admin or the user themself."""
    if actor.is_admin or actor.id == user_id:
        return
    raise AuthorizationException(
        resource="user",
        action=action,
        message=f"You do not have permission to {verb}",
    )


def log_rejection(
    operation: str,
    exc: TaskboardException,
    *,
    user_id: str | None,
    actor_id: str | None,
) -> None:
    """Log a rejected user operation at warning level before it propagates."""
    logger.warning(
        "User %s rejected: %s %s",
        operation,
        exc.error_code,
        log_context(user_id=user_id, actor_id=actor_id, reason=exc.message),
    )
