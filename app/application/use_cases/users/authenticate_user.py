"""Login use case: email and password to a user."""

from __future__ import annotations

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserRepository
from app.domain.exceptions import AuthenticationException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthenticateUserUseCase:
    """Checks credentials. Unknown email, wrong password and inactive account look the same."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def execute(self, email: str, password: str) -> UserResult:
        """Return the authenticated user or raise AuthenticationException."""
        user = (
            await self.user_repo.authenticate(email.strip().lower(), password)
            if email and password
            else None
        )
        if user is None:
            logger.warning("Login rejected: invalid credentials")
            raise AuthenticationException(INVALID_CREDENTIALS)
        logger.info("User logged in user_id=%s role=%s", user.id, user.role.value)
        return user
