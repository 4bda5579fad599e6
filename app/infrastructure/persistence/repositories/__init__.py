"""Repositories: data access over the SQLAlchemy async session."""

from app.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
    activity_log_repository_scope,
)
from app.infrastructure.persistence.repositories.auditable_repo import AuditableRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.club_repo import ClubRepository
from app.infrastructure.persistence.repositories.player_repo import PlayerRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ActivityLogRepository",
    "AuditableRepository",
    "BaseRepository",
    "ClubRepository",
    "PlayerRepository",
    "UserRepository",
    "activity_log_repository_scope",
]
