"""Domain value objects for the Taskboard application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from app.domain.enums import UserRole


@dataclass(frozen=True)
class Actor:
    """Value object for the authenticated caller of an operation (SRP).

    Produced by the authentication layer. Role may be absent on
    lower-privilege paths; absence means "not admin", never an error.
    """

    id: str
    role: UserRole | None = None

    def __post_init__(self) -> None:
        """Validate non-empty id.

        Raises:
            ValueError: If id is empty.
        """
        if not self.id:
            raise ValueError("Actor id must be a non-empty string")

    @property
    def is_admin(self) -> bool:
        """Return whether the actor holds the ADMIN role."""
        return self.role is UserRole.ADMIN

    @classmethod
    def from_claims(cls, user_id: str, role: str | None) -> "Actor":
        """Build an actor from token claims; unknown or missing role degrades to None.

        The role claim is matched case-insensitively ("ADMIN" is the admin role).

        Args:
            user_id: Subject claim (user id).
            role: Role claim as sent by the identity provider, if any.

        Returns:
            Actor with a recognized role or no role.
        """
        try:
            parsed = UserRole(role.strip().lower()) if role else None
        except ValueError:
            parsed = None
        return cls(id=user_id, role=parsed)
