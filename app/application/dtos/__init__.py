"""Application DTOs (no ORM dependency)."""

from app.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogFilters,
    ActivityLogPage,
    ActivityLogResult,
    PageRequest,
    PendingActivity,
)
from app.application.dtos.mutation import Mutation

__all__ = [
    "ActivityLogEntryCreate",
    "ActivityLogFilters",
    "ActivityLogPage",
    "ActivityLogResult",
    "Mutation",
    "PageRequest",
    "PendingActivity",
]
