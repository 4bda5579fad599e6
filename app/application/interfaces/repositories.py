"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.activity_log import (
        ActivityLogEntryCreate,
        ActivityLogFilters,
        ActivityLogResult,
        PageRequest,
    )


class IActivityLogRepository(Protocol):
    """Protocol for the append-only activity log store (DIP)."""

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one entry."""

    async def list(
        self, filters: ActivityLogFilters, page: PageRequest
    ) -> list[ActivityLogResult]:
        """Return one page of entries matching filters."""

    async def count(self, filters: ActivityLogFilters) -> int:
        """Return the number of entries matching filters."""
