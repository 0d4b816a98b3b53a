"""Security: JWT access tokens and password hashing."""

from app.infrastructure.security.jwt import (
    actor_from_token,
    create_access_token,
    verify_token,
)
from app.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "actor_from_token",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
