"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
    VersionedModel,
)
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "Task",
    "TimestampMixin",
    "User",
    "VersionedMixin",
    "VersionedModel",
]
