"""DTOs for the activity log (data mutation audit trail)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.shared.enums import SortOrder

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200


@dataclass(frozen=True)
class PendingActivity:
    """One mutation ready to be written: action, entity, and its change set."""

    action: str
    entity_type: str
    entity_id: str | None
    changes: dict[str, Any] | str | None


@dataclass(frozen=True)
class ActivityLogEntryCreate:
    """Input for appending one activity log record. Append-only; no update."""

    action: str
    entity_type: str
    entity_id: str | None
    actor_id: str | None
    actor_name: str | None
    actor_email: str | None
    actor_role: str | None
    ip_address: str | None
    user_agent: str | None
    changes: str | None


@dataclass(frozen=True)
class ActivityLogResult:
    """Single activity log entry (read-model for list)."""

    id: str
    action: str
    entity_type: str
    entity_id: str | None
    actor_id: str | None
    actor_name: str | None
    actor_email: str | None
    actor_role: str | None
    ip_address: str | None
    user_agent: str | None
    changes: str | None
    created_at: datetime


@dataclass(frozen=True)
class ActivityLogFilters:
    """Optional, ANDed filters for listing activity log entries."""

    entity_type: str | None = None
    action: str | None = None
    actor_email: str | None = None
    search: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page with a clamped page size and created_at sort order."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_raw(
        cls,
        page: str | int | None,
        limit: str | int | None,
        sort_order: str | None = None,
    ) -> PageRequest:
        """Lenient parse: unparsable or zero values fall back to defaults, then clamp."""
        page_num = _parse_nonzero_int(page) or 1
        size = _parse_nonzero_int(limit) or DEFAULT_PAGE_SIZE
        return cls(
            page=max(1, page_num),
            limit=min(MAX_PAGE_SIZE, max(1, size)),
            sort_order=SortOrder.parse(sort_order),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ActivityLogPage:
    """One page of activity log entries plus totals."""

    records: list[ActivityLogResult] = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit) or 1


def _parse_nonzero_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value != 0 else None
