"""Activity log dependencies (composition root)."""

from __future__ import annotations

from fastapi import Request

from app.application.services.activity_log_query_service import ActivityLogQueryService
from app.application.services.mutation_interceptor import MutationInterceptor
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories.activity_log_repo import (
    activity_log_repository_scope,
)


def get_mutation_interceptor(request: Request) -> MutationInterceptor | None:
    """Process-wide interceptor built in the lifespan (None before startup)."""
    return getattr(request.app.state, "mutation_interceptor", None)


def get_activity_log_query_service() -> ActivityLogQueryService:
    """Query service over its own read session, opened only for admins."""
    return ActivityLogQueryService(
        activity_log_repository_scope(get_session_factory()),
        admin_role=get_settings().admin_role,
    )
