"""ActivityLogRepository: filters, ordering, paging, immutability and pruning."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogFilters,
    PageRequest,
)
from app.domain.exceptions import (
    ActivityLogStoreUnavailableException,
    SqlNotConfiguredException,
)
from app.infrastructure.persistence.models import ActivityLog
from app.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    activity_log_repository_scope,
)
from app.shared.enums import SortOrder

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

ROWS = [
    # (id, action, entity_type, entity_id, actor_name, actor_email, days after BASE_TIME)
    ("log-1", "CLUB_CREATE", "Club", "c1", "Ada Admin", "ada@leaguedesk.test", 0),
    ("log-2", "CLUB_UPDATE", "Club", "c1", "Ada Admin", "ada@leaguedesk.test", 1),
    ("log-3", "PLAYER_CREATE", "Player", "p1", "Priya Sharma", "priya@club.test", 2),
    ("log-4", "PLAYER_UPDATE", "Player", "p1", None, None, 3),
    ("log-5", "CLUB_UPDATEMANY", "Club", None, "Ada Admin", "ada@leaguedesk.test", 4),
]


@pytest.fixture
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        async with session.begin():
            for log_id, action, entity_type, entity_id, name, email, day in ROWS:
                session.add(
                    ActivityLog(
                        id=log_id,
                        action=action,
                        entity_type=entity_type,
                        entity_id=entity_id,
                        actor_name=name,
                        actor_email=email,
                        created_at=BASE_TIME + timedelta(days=day),
                    )
                )


async def _list(db_session: AsyncSession, filters: ActivityLogFilters, page: PageRequest | None = None):
    repo = ActivityLogRepository(db_session)
    return [r.id for r in await repo.list(filters, page or PageRequest())]


async def test_create_returns_stored_record(db_session: AsyncSession) -> None:
    repo = ActivityLogRepository(db_session)
    created = await repo.create(
        ActivityLogEntryCreate(
            action="CLUB_CREATE",
            entity_type="Club",
            entity_id="c1",
            actor_id="u1",
            actor_name="Ada Admin",
            actor_email="ada@leaguedesk.test",
            actor_role="admin",
            ip_address="127.0.0.1",
            user_agent="pytest",
            changes='{"name": {"old": null, "new": "Rovers"}}',
        )
    )
    await db_session.commit()

    assert created.id
    assert created.created_at is not None
    assert await repo.count(ActivityLogFilters()) == 1


async def test_default_order_is_newest_first(seeded, db_session: AsyncSession) -> None:
    assert await _list(db_session, ActivityLogFilters()) == [
        "log-5",
        "log-4",
        "log-3",
        "log-2",
        "log-1",
    ]


async def test_ascending_order(seeded, db_session: AsyncSession) -> None:
    page = PageRequest(sort_order=SortOrder.ASC)
    assert (await _list(db_session, ActivityLogFilters(), page))[0] == "log-1"


async def test_exact_filters(seeded, db_session: AsyncSession) -> None:
    assert await _list(db_session, ActivityLogFilters(entity_type="Player")) == ["log-4", "log-3"]
    assert await _list(db_session, ActivityLogFilters(action="CLUB_UPDATE")) == ["log-2"]
    assert await _list(db_session, ActivityLogFilters(entity_type="Club", action="PLAYER_CREATE")) == []


async def test_actor_email_is_substring_match(seeded, db_session: AsyncSession) -> None:
    assert await _list(db_session, ActivityLogFilters(actor_email="club.test")) == ["log-3"]


async def test_search_spans_actor_entity_and_action(seeded, db_session: AsyncSession) -> None:
    assert await _list(db_session, ActivityLogFilters(search="Priya")) == ["log-3"]
    assert await _list(db_session, ActivityLogFilters(search="p1")) == ["log-4", "log-3"]
    assert await _list(db_session, ActivityLogFilters(search="UPDATEMANY")) == ["log-5"]
    assert await _list(db_session, ActivityLogFilters(search="Player")) == ["log-4", "log-3"]


async def test_date_range_is_inclusive(seeded, db_session: AsyncSession) -> None:
    filters = ActivityLogFilters(
        created_from=BASE_TIME + timedelta(days=1),
        created_to=BASE_TIME + timedelta(days=3),
    )
    assert await _list(db_session, filters) == ["log-4", "log-3", "log-2"]
    assert await _list(db_session, ActivityLogFilters(created_from=BASE_TIME + timedelta(days=4))) == ["log-5"]
    assert await _list(db_session, ActivityLogFilters(created_to=BASE_TIME)) == ["log-1"]


async def test_paging_and_count(seeded, db_session: AsyncSession) -> None:
    repo = ActivityLogRepository(db_session)
    first = await repo.list(ActivityLogFilters(), PageRequest(page=1, limit=2))
    third = await repo.list(ActivityLogFilters(), PageRequest(page=3, limit=2))
    beyond = await repo.list(ActivityLogFilters(), PageRequest(page=4, limit=2))

    assert [r.id for r in first] == ["log-5", "log-4"]
    assert [r.id for r in third] == ["log-1"]
    assert beyond == []
    assert await repo.count(ActivityLogFilters()) == 5
    assert await repo.count(ActivityLogFilters(entity_type="Club")) == 3


async def test_entries_cannot_be_updated_through_orm(seeded, db_session: AsyncSession) -> None:
    row = (await db_session.execute(select(ActivityLog).where(ActivityLog.id == "log-1"))).scalar_one()
    row.action = "CLUB_DELETE"
    with pytest.raises(ValueError, match="immutable"):
        await db_session.flush()


async def test_entries_cannot_be_deleted_through_orm(seeded, db_session: AsyncSession) -> None:
    row = (await db_session.execute(select(ActivityLog).where(ActivityLog.id == "log-1"))).scalar_one()
    await db_session.delete(row)
    with pytest.raises(ValueError, match="cannot be deleted"):
        await db_session.flush()


async def test_delete_older_than(seeded, session_factory) -> None:
    async with session_factory() as session:
        async with session.begin():
            removed = await ActivityLogRepository(session).delete_older_than(
                BASE_TIME + timedelta(days=2)
            )
    assert removed == 2
    async with session_factory() as session:
        assert await ActivityLogRepository(session).count(ActivityLogFilters()) == 3


async def test_scope_requires_sql_store() -> None:
    scope = activity_log_repository_scope(None)
    with pytest.raises(SqlNotConfiguredException):
        async with scope():
            pass


async def test_scope_reports_store_failures(engine, session_factory) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(ActivityLog.__table__.drop)

    scope = activity_log_repository_scope(session_factory)
    with pytest.raises(ActivityLogStoreUnavailableException):
        async with scope() as repo:
            await repo.count(ActivityLogFilters())
