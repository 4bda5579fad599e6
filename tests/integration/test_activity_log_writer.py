"""ActivityLogWriter against a real store: attribution and failure handling."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.infrastructure.persistence.models import ActivityLog, User
from app.infrastructure.services.activity_log_writer import UNKNOWN, ActivityLogWriter
from app.shared.context import RequestContext, request_context


async def _only_log(session_factory: async_sessionmaker[AsyncSession]) -> ActivityLog:
    async with session_factory() as session:
        result = await session.execute(select(ActivityLog))
        return result.scalar_one()


@pytest.fixture
async def registered_user(session_factory: async_sessionmaker[AsyncSession]) -> User:
    async with session_factory() as session:
        async with session.begin():
            user = User(
                name="Priya Sharma",
                email="priya@club.test",
                role="club_manager",
                hashed_password="hash",
            )
            session.add(user)
    return user


async def test_token_identity_and_provenance_are_recorded(session_factory) -> None:
    ctx = RequestContext(
        actor_id="u1",
        actor_name="Ada Admin",
        actor_role="admin",
        actor_email="ada@leaguedesk.test",
        ip_address="198.51.100.4",
        user_agent="curl/8.5",
    )
    await ActivityLogWriter(session_factory).write(
        "CLUB_CREATE", "Club", "c1", {"name": {"old": None, "new": "Rovers"}}, context=ctx
    )

    log = await _only_log(session_factory)
    assert (log.actor_id, log.actor_name, log.actor_role, log.actor_email) == (
        "u1",
        "Ada Admin",
        "admin",
        "ada@leaguedesk.test",
    )
    assert log.ip_address == "198.51.100.4"
    assert log.user_agent == "curl/8.5"
    assert log.changes == '{"name": {"old": null, "new": "Rovers"}}'
    assert log.created_at is not None


async def test_ambient_context_is_used_when_none_passed(session_factory) -> None:
    with request_context(RequestContext(actor_id="u2", actor_role="referee")):
        await ActivityLogWriter(session_factory).write("CLUB_DELETE", "Club", "c2", {})
    log = await _only_log(session_factory)
    assert log.actor_id == "u2"
    assert log.actor_role == "referee"


async def test_no_context_leaves_actor_empty(session_factory) -> None:
    await ActivityLogWriter(session_factory).write("CLUB_CREATE", "Club", "c1", None)
    log = await _only_log(session_factory)
    assert log.actor_id is None
    assert log.actor_email is None
    assert log.ip_address is None
    assert log.changes is None


async def test_blank_action_and_entity_become_unknown(session_factory) -> None:
    await ActivityLogWriter(session_factory).write("  ", "", None, None)
    log = await _only_log(session_factory)
    assert log.action == UNKNOWN
    assert log.entity_type == UNKNOWN


async def test_claimed_email_is_backfilled_from_identity_store(
    session_factory, registered_user: User
) -> None:
    ctx = RequestContext(ip_address="10.0.0.5").with_claims("priya@club.test", None)
    await ActivityLogWriter(session_factory).write("CLUB_UPDATE", "Club", "c1", {}, context=ctx)

    log = await _only_log(session_factory)
    assert log.actor_id == registered_user.id
    assert log.actor_name == "Priya Sharma"
    assert log.actor_role == "club_manager"
    assert log.actor_email == "priya@club.test"


async def test_claimed_lookup_can_be_disabled(
    session_factory, registered_user: User
) -> None:
    ctx = RequestContext().with_claims("priya@club.test", "Someone Else")
    writer = ActivityLogWriter(session_factory, resolve_claimed_actor=False)
    await writer.write("CLUB_UPDATE", "Club", "c1", {}, context=ctx)

    log = await _only_log(session_factory)
    assert log.actor_id is None
    assert log.actor_role is None
    assert log.actor_email == "priya@club.test"
    assert log.actor_name == "Someone Else"


async def test_self_registration_attributes_new_user(
    session_factory, registered_user: User
) -> None:
    ctx = RequestContext().with_claims("priya@club.test", "Priya Sharma")
    await ActivityLogWriter(session_factory).write(
        "USER_CREATE", "User", registered_user.id, {}, context=ctx
    )

    log = await _only_log(session_factory)
    assert log.actor_id == registered_user.id
    assert log.actor_name == "Priya Sharma"
    assert log.actor_role == "club_manager"


async def test_unknown_claimed_email_keeps_hints_only(session_factory) -> None:
    ctx = RequestContext().with_claims("nobody@club.test", None)
    await ActivityLogWriter(session_factory).write("CLUB_UPDATE", "Club", "c1", {}, context=ctx)
    log = await _only_log(session_factory)
    assert log.actor_email == "nobody@club.test"
    assert log.actor_id is None


async def test_authenticated_identity_is_never_overridden_by_claims(
    session_factory, registered_user: User
) -> None:
    ctx = RequestContext(
        actor_id="u1", actor_name="Ada Admin", actor_role="admin"
    ).with_claims("priya@club.test", "Priya Sharma")
    await ActivityLogWriter(session_factory).write("CLUB_UPDATE", "Club", "c1", {}, context=ctx)
    log = await _only_log(session_factory)
    assert log.actor_id == "u1"
    assert log.actor_email is None


async def test_unserializable_changes_still_write_the_record(session_factory) -> None:
    await ActivityLogWriter(session_factory).write(
        "CLUB_UPDATE", "Club", "c1", {"blob": {"old": None, "new": object()}}
    )
    log = await _only_log(session_factory)
    assert log.action == "CLUB_UPDATE"
    assert log.changes is None


async def test_without_store_writes_are_skipped() -> None:
    await ActivityLogWriter(None).write("CLUB_CREATE", "Club", "c1", {})


async def test_store_failure_is_logged_not_raised(
    engine, session_factory, caplog: pytest.LogCaptureFixture
) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(ActivityLog.__table__.drop)

    await ActivityLogWriter(session_factory).write("CLUB_CREATE", "Club", "c1", {})

    assert "Failed to write activity log for CLUB_CREATE" in caplog.text
