"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole
from app.domain.exceptions import ConflictException, DuplicateEmailException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash, verify_password
from app.shared.utils.datetime import utc_now

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
# Computed on first use in a thread to avoid blocking the event loop at import.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository: lookups, CRUD, authenticate, passwords."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        row = await self._get_row(user_id)
        return _user_to_result(row) if row else None

    async def _get_row_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserResult | None:
        """Case-insensitive lookup by email."""
        row = await self._get_row_by_email(email)
        return _user_to_result(row) if row else None

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        rows = await self._list(
            select(User).order_by(User.created_at.desc(), User.id).offset(skip).limit(limit)
        )
        return [_user_to_result(u) for u in rows]

    async def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.DEVELOPER,
        *,
        password: str | None = None,
        is_active: bool = True,
    ) -> UserResult:
        """Insert a user; raise DuplicateEmailException when the email is taken."""
        hashed = (
            await asyncio.to_thread(get_password_hash, password)
            if password is not None
            else None
        )
        user = User(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            role=role.value,
            is_active=is_active,
            hashed_password=hashed,
        )
        try:
            async with self.db.begin_nested():
                created = await self._add(user)
        except IntegrityError:
            raise DuplicateEmailException(email) from None
        return _user_to_result(created)

    async def update_user(
        self, user_id: str, changes: Mapping[str, Any]
    ) -> UserResult | None:
        """Apply profile changes (password is hashed); raise DuplicateEmailException on a taken email."""
        user = await self._get_row(user_id)
        if user is None:
            return None
        for name, value in changes.items():
            if name == "password":
                user.hashed_password = await asyncio.to_thread(get_password_hash, value)
            elif name == "role":
                user.role = UserRole(value).value
            elif name == "email":
                user.email = value.strip().lower()
            else:
                setattr(user, name, value)
        user.updated_at = utc_now()
        try:
            async with self.db.begin_nested():
                await self.db.flush()
        except IntegrityError:
            raise DuplicateEmailException(changes.get("email", user.email)) from None
        await self.db.refresh(user)
        return _user_to_result(user)

    async def delete_user(self, user_id: str) -> bool:
        """Delete the user; tasks they created block the delete (ConflictException)."""
        try:
            async with self.db.begin_nested():
                return await self._delete_by_id(user_id)
        except IntegrityError:
            raise ConflictException(
                "User still has tasks they created",
                details={"user_id": user_id},
            ) from None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        user = await self._get_row_by_email(email)
        if user is None or user.hashed_password is None:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def check_password(self, user_id: str, password: str) -> bool:
        user = await self._get_row(user_id)
        if user is None or user.hashed_password is None:
            return False
        return await asyncio.to_thread(verify_password, password, user.hashed_password)

    async def update_password(self, user_id: str, new_password: str) -> bool:
        user = await self._get_row(user_id)
        if user is None:
            return False
        user.hashed_password = await asyncio.to_thread(get_password_hash, new_password)
        user.updated_at = utc_now()
        await self.db.flush()
        return True
