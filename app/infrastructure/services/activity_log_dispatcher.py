"""Activity log dispatcher: hands interceptor output to the writer.

Sits between MutationInterceptor (IActivitySink) and ActivityLogWriter.
Inline mode awaits each write under a timeout; background mode schedules
the write as a tracked task and returns at once. Records released by a
transaction commit arrive through schedule() and are always written by a
tracked task, since commit hooks cannot await. Either way the caller never
sees an error.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.activity_log import PendingActivity
    from app.application.interfaces.services import IActivityLogWriter
    from app.shared.context import RequestContext

logger = get_logger(__name__)


class ActivityLogDispatcher:
    """Implements IActivitySink. Bounded latency per write; drain() on shutdown."""

    def __init__(
        self,
        writer: IActivityLogWriter,
        *,
        mode: str = "background",
        timeout_seconds: float = 5.0,
    ) -> None:
        if mode not in ("inline", "background"):
            raise ValueError(f"Unknown dispatch mode: {mode!r}")
        self._writer = writer
        self._mode = mode
        self._timeout = timeout_seconds
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def submit(
        self, activity: PendingActivity, context: RequestContext | None
    ) -> None:
        """Dispatch one record. Returns after the write (inline) or at once (background)."""
        if self._mode == "inline":
            await self._write_bounded(activity, context)
            return
        self.schedule(activity, context)

    def schedule(
        self, activity: PendingActivity, context: RequestContext | None
    ) -> None:
        """Start the write as a tracked task in either mode (used after a commit)."""
        # The task copies the current contextvars, request context included.
        task = asyncio.create_task(self._write_bounded(activity, context))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write_bounded(
        self, activity: PendingActivity, context: RequestContext | None
    ) -> None:
        try:
            await asyncio.wait_for(
                self._writer.write(
                    activity.action,
                    activity.entity_type,
                    activity.entity_id,
                    activity.changes,
                    context=context,
                ),
                timeout=self._timeout,
            )
        except TimeoutError:
            logger.warning(
                "Activity log write timed out after %.1fs: %s %s",
                self._timeout,
                activity.action,
                activity.entity_id,
            )
        except Exception as e:
            logger.warning(
                "Activity log dispatch failed for %s: %s",
                activity.action,
                e,
                exc_info=True,
            )

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for outstanding background writes (e.g. on shutdown, in tests)."""
        if not self._pending:
            return
        _, pending = await asyncio.wait(set(self._pending), timeout=timeout)
        if pending:
            logger.warning("%d activity log write(s) still pending after drain", len(pending))
