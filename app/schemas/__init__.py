"""Pydantic request/response schemas for the HTTP API."""

from app.schemas.activity_log import ActivityLogEntryResponse, ActivityLogListResponse
from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse

__all__ = [
    "ActivityLogEntryResponse",
    "ActivityLogListResponse",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
