"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.activity_log_dispatcher import ActivityLogDispatcher
from app.infrastructure.services.activity_log_retention import (
    ActivityLogRetentionJob,
    retention_cutoff,
)
from app.infrastructure.services.activity_log_writer import (
    ActivityLogWriter,
    serialize_changes,
)

__all__ = [
    "ActivityLogDispatcher",
    "ActivityLogRetentionJob",
    "ActivityLogWriter",
    "retention_cutoff",
    "serialize_changes",
]
