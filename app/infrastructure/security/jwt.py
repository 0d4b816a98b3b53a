"""JWT token creation and verification for authentication.

Tokens carry sub (user id) and an optional role claim. Uses app.core.config
for secret, algorithm and default lifetime.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.enums import UserRole
from app.domain.exceptions import AuthenticationException
from app.domain.value_objects.core import Actor
from app.shared.utils.datetime import utc_now


def create_access_token(
    user_id: str,
    role: UserRole | str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for user_id.

    Args:
        user_id: Subject claim.
        role: Optional role claim (enum or its value).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": user_id, "exp": utc_now() + ttl}
    if role is not None:
        claims["role"] = role.value if isinstance(role, UserRole) else role
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        AuthenticationException: Token invalid, expired, or missing sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise AuthenticationException(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise AuthenticationException("Token missing required claim: sub")
    return payload


def actor_from_token(token: str) -> Actor:
    """Verify token and build the Actor it identifies (unknown role -> no role)."""
    payload = verify_token(token)
    role = payload.get("role")
    return Actor.from_claims(str(payload["sub"]), role if isinstance(role, str) else None)
