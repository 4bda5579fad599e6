"""Activity log retention: deletes records older than the configured window.

ACTIVITY_LOG_RETENTION_DAYS absent, unparsable or <= 0 disables pruning.
Run periodically from the application lifespan (start/stop) or once from
scripts/run_activity_log_retention.py.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def retention_cutoff(retention_days: int, now: datetime | None = None) -> datetime:
    """Oldest created_at that survives a cleanup pass."""
    return (now or utc_now()) - timedelta(days=retention_days)


class ActivityLogRetentionJob:
    """Periodic bulk delete of expired activity log records."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None,
        retention_days: int | None,
        *,
        interval_seconds: float = 86_400,
    ) -> None:
        self._session_factory = session_factory
        self._retention_days = retention_days
        self._interval = interval_seconds
        self._running = False
        self._task: asyncio.Task[None] | None = None

    @property
    def enabled(self) -> bool:
        return (
            self._session_factory is not None
            and self._retention_days is not None
            and self._retention_days > 0
        )

    async def run_once(self, now: datetime | None = None) -> int:
        """One cleanup pass. Returns rows deleted; 0 when disabled, overlapping or failed."""
        factory, days = self._session_factory, self._retention_days
        if factory is None or not days or days <= 0 or self._running:
            return 0
        self._running = True
        cutoff = retention_cutoff(days, now)
        try:
            async with factory() as session:
                async with session.begin():
                    count = await ActivityLogRepository(session).delete_older_than(cutoff)
        except Exception as e:
            logger.warning("Activity log cleanup failed: %s", e, exc_info=True)
            return 0
        finally:
            self._running = False
        if count:
            logger.info(
                "Activity log cleanup: deleted %s record(s) older than %s days",
                count,
                self._retention_days,
            )
        return count

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        """Schedule the periodic cleanup (first pass immediately). No-op when disabled."""
        if not self.enabled or self._task is not None:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(
            "Activity log retention enabled: %s days, every %ss",
            self._retention_days,
            self._interval,
        )

    async def stop(self) -> None:
        """Cancel the periodic cleanup and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
