"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.activity_log import PendingActivity
    from app.shared.context import RequestContext


class IActivitySink(Protocol):
    """Receives finished activity records from the mutation interceptor."""

    async def submit(
        self, activity: PendingActivity, context: RequestContext | None
    ) -> None:
        """Hand over one record for writing. Must not raise."""

    def schedule(
        self, activity: PendingActivity, context: RequestContext | None
    ) -> None:
        """Hand over one record from synchronous code, without waiting. Must not raise."""


class IActivityLogWriter(Protocol):
    """Persists one activity record with resolved actor attribution."""

    async def write(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None,
        changes: object,
        *,
        context: RequestContext | None = None,
    ) -> None:
        """Write the record. Never raises; failures are logged."""
