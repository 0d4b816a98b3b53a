"""DTOs for user lookups (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, get_by_email, create_user). No password."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
