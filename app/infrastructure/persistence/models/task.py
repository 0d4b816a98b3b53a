"""Task ORM model. Table: task."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import VersionedModel


class Task(VersionedModel, Base):
    """Work item inside a project. Status and priority stored as their enum values."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="todo", server_default="todo"
    )
    priority: Mapped[str] = mapped_column(
        String(32), nullable=False, default="medium", server_default="medium"
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    # project_id is an opaque reference; projects live outside this service.
    project_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    assignee_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    estimated_hours: Mapped[float] = mapped_column(
        Float, nullable=False, default=1.0, server_default="1"
    )
    actual_hours: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0, server_default="0"
    )

    __table_args__ = (
        Index("ix_task_project_status", "project_id", "status"),
        Index("ix_task_priority", "priority"),
    )
