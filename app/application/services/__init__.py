"""Application services: change diffing, mutation interception, activity log queries."""

from app.application.services.activity_log_query_service import ActivityLogQueryService
from app.application.services.change_diff import diff_snapshots, is_scalar_like, to_snapshot
from app.application.services.mutation_interceptor import MutationInterceptor

__all__ = [
    "ActivityLogQueryService",
    "MutationInterceptor",
    "diff_snapshots",
    "is_scalar_like",
    "to_snapshot",
]
