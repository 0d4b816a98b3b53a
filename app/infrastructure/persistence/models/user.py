"""User ORM model (accounts, task creators and assignees)."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Email is unique; role stored as UserRole value.

    hashed_password is NULL for accounts that cannot sign in (e.g. imported
    assignees); login always fails for them.
    """

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default="developer", server_default="developer"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
