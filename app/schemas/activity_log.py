"""Response schemas for the activity log API (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ActivityLogEntryResponse(BaseModel):
    """Single activity log entry (read). changes is the stored JSON text."""

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str
    action: str
    entity_type: str
    entity_id: str | None = None
    actor_id: str | None = None
    actor_name: str | None = None
    actor_email: str | None = None
    actor_role: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    changes: str | None = None
    created_at: datetime


class ActivityLogListResponse(BaseModel):
    """One page of activity log entries."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    logs: list[ActivityLogEntryResponse]
    page: int
    total_pages: int = Field(..., description="ceil(totalLogs / limit), at least 1")
    total_logs: int
