"""Retention job: prunes expired activity log records."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select

from app.infrastructure.persistence.models import ActivityLog
from app.infrastructure.services import ActivityLogRetentionJob, retention_cutoff

NOW = datetime(2026, 6, 1, 0, 0, tzinfo=UTC)


@pytest.fixture
async def aged_logs(session_factory) -> None:
    async with session_factory() as session:
        async with session.begin():
            for log_id, age_days in (("old-1", 90), ("old-2", 31), ("recent", 5)):
                session.add(
                    ActivityLog(
                        id=log_id,
                        action="CLUB_UPDATE",
                        entity_type="Club",
                        created_at=NOW - timedelta(days=age_days),
                    )
                )


async def _remaining(session_factory) -> list[str]:
    async with session_factory() as session:
        result = await session.execute(select(ActivityLog.id).order_by(ActivityLog.id))
        return list(result.scalars().all())


def test_retention_cutoff() -> None:
    assert retention_cutoff(30, NOW) == NOW - timedelta(days=30)


async def test_run_once_deletes_expired_records(aged_logs, session_factory) -> None:
    job = ActivityLogRetentionJob(session_factory, 30)
    assert job.enabled
    assert await job.run_once(NOW) == 2
    assert await _remaining(session_factory) == ["recent"]


@pytest.mark.parametrize("days", [None, 0, -3])
async def test_disabled_retention_deletes_nothing(aged_logs, session_factory, days) -> None:
    job = ActivityLogRetentionJob(session_factory, days)
    assert not job.enabled
    assert await job.run_once(NOW) == 0
    assert len(await _remaining(session_factory)) == 3


async def test_without_store_nothing_runs() -> None:
    job = ActivityLogRetentionJob(None, 30)
    assert not job.enabled
    assert await job.run_once(NOW) == 0


async def test_failed_pass_returns_zero(engine, session_factory) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(ActivityLog.__table__.drop)
    assert await ActivityLogRetentionJob(session_factory, 30).run_once(NOW) == 0


async def test_start_and_stop(aged_logs, session_factory) -> None:
    job = ActivityLogRetentionJob(session_factory, 30, interval_seconds=3600)
    job.start()
    await job.stop()
    await job.stop()
