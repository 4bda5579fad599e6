"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, activity log writer).
"""

from app.application.interfaces import (
    IActivityLogRepository,
    IActivityLogWriter,
    IActivitySink,
)
from app.application.services.activity_log_query_service import ActivityLogQueryService
from app.application.services.mutation_interceptor import MutationInterceptor

__all__ = [
    "ActivityLogQueryService",
    "IActivityLogRepository",
    "IActivityLogWriter",
    "IActivitySink",
    "MutationInterceptor",
]
