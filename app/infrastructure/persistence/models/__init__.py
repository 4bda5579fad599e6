"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.activity_log import ActivityLog
from app.infrastructure.persistence.models.club import Club
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    EntityModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.player import Player
from app.infrastructure.persistence.models.user import User

__all__ = [
    "ActivityLog",
    "Club",
    "CuidMixin",
    "EntityModel",
    "Player",
    "TimestampMixin",
    "User",
]
