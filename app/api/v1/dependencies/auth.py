"""Auth dependencies: bearer token -> Actor, role gates (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.domain.enums import UserRole
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.domain.value_objects.core import Actor
from app.infrastructure.security.jwt import actor_from_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_actor_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Actor | None:
    """Return the caller from a valid JWT, or None when no token was sent."""
    if not credentials:
        return None
    return actor_from_token(credentials.credentials)


async def get_current_actor(
    actor: Annotated[Actor | None, Depends(get_current_actor_optional)],
) -> Actor:
    """Return the caller from the JWT; 401 if missing or invalid."""
    if actor is None:
        raise AuthenticationException("Not authenticated")
    return actor


def require_roles(resource: str, action: str, *roles: UserRole):
    """Dependency factory: require JWT auth and one of roles."""
    allowed = frozenset(roles)

    async def _require(
        actor: Annotated[Actor, Depends(get_current_actor)],
    ) -> Actor:
        if actor.role not in allowed:
            raise AuthorizationException(
                resource=resource,
                action=action,
                message="Requires role: " + ", ".join(sorted(r.value for r in allowed)),
            )
        return actor

    return _require
