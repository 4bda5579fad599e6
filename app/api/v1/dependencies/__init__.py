"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the request actor, the audited repositories
and the activity log query service. Routes depend only on these, not on
infrastructure directly.
"""

from app.api.v1.dependencies.activity_log import (
    get_activity_log_query_service,
    get_mutation_interceptor,
)
from app.api.v1.dependencies.auth import require_authenticated_actor
from app.api.v1.dependencies.repositories import (
    get_club_repository,
    get_player_repository,
    get_user_repository,
)

__all__ = [
    "get_activity_log_query_service",
    "get_club_repository",
    "get_mutation_interceptor",
    "get_player_repository",
    "get_user_repository",
    "require_authenticated_actor",
]
