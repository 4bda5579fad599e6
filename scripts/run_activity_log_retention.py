"""Run one activity log retention pass: delete records older than the window.

Usage:
    uv run python -m scripts.run_activity_log_retention [days]
If days is omitted, ACTIVITY_LOG_RETENTION_DAYS is used.
Requires DATABASE_URL.
"""

import asyncio
import sys

from app.core.config import get_settings
import app.infrastructure.persistence.database as database
from app.infrastructure.services import ActivityLogRetentionJob


async def main() -> None:
    """Delete expired activity log records once and report the count."""
    settings = get_settings()
    session_factory = database.get_session_factory()
    if session_factory is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)
    retention_days = settings.activity_log_retention_days
    if len(sys.argv) > 1:
        retention_days = int(sys.argv[1])
    if retention_days is None or retention_days < 1:
        print(
            "Set ACTIVITY_LOG_RETENTION_DAYS (>= 1) or pass days to enable retention",
            file=sys.stderr,
        )
        sys.exit(1)

    job = ActivityLogRetentionJob(session_factory, retention_days)
    deleted = await job.run_once()
    print(f"Done. Deleted {deleted} activity log record(s) older than {retention_days} days")
    if database.engine is not None:
        await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
