"""Activity log repository. Append-only; implements IActivityLogRepository."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogFilters,
    ActivityLogResult,
    PageRequest,
)
from app.domain.exceptions import (
    ActivityLogStoreUnavailableException,
    SqlNotConfiguredException,
)
from app.infrastructure.persistence.models.activity_log import ActivityLog
from app.shared.enums import SortOrder
from app.shared.utils.generators import generate_cuid


def _orm_to_result(row: ActivityLog) -> ActivityLogResult:
    """Map ORM to application DTO."""
    return ActivityLogResult(
        id=row.id,
        action=row.action,
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        actor_id=row.actor_id,
        actor_name=row.actor_name,
        actor_email=row.actor_email,
        actor_role=row.actor_role,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        changes=row.changes,
        created_at=row.created_at,
    )


def _filter_conditions(filters: ActivityLogFilters) -> list[Any]:
    conditions: list[Any] = []
    if filters.entity_type:
        conditions.append(ActivityLog.entity_type == filters.entity_type)
    if filters.action:
        conditions.append(ActivityLog.action == filters.action)
    if filters.actor_email:
        conditions.append(ActivityLog.actor_email.contains(filters.actor_email))
    if filters.search:
        term = filters.search
        conditions.append(
            or_(
                ActivityLog.actor_name.contains(term),
                ActivityLog.actor_email.contains(term),
                ActivityLog.entity_type.contains(term),
                ActivityLog.entity_id.contains(term),
                ActivityLog.action.contains(term),
            )
        )
    if filters.created_from is not None:
        conditions.append(ActivityLog.created_at >= filters.created_from)
    if filters.created_to is not None:
        conditions.append(ActivityLog.created_at <= filters.created_to)
    return conditions


class ActivityLogRepository:
    """Append-only activity log repository. No update; deletion only by retention."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one activity log entry; return created record."""
        row = ActivityLog(
            id=generate_cuid(),
            action=entry.action,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            actor_email=entry.actor_email,
            actor_role=entry.actor_role,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            changes=entry.changes,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list(
        self, filters: ActivityLogFilters, page: PageRequest
    ) -> list[ActivityLogResult]:
        """List entries matching filters, ordered by created_at (id breaks ties)."""
        if page.sort_order is SortOrder.ASC:
            order_by = (ActivityLog.created_at.asc(), ActivityLog.id.asc())
        else:
            order_by = (ActivityLog.created_at.desc(), ActivityLog.id.desc())
        stmt = (
            select(ActivityLog)
            .where(and_(*_filter_conditions(filters)))
            .order_by(*order_by)
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def count(self, filters: ActivityLogFilters) -> int:
        """Number of entries matching filters (ignores pagination)."""
        stmt = (
            select(func.count())
            .select_from(ActivityLog)
            .where(and_(*_filter_conditions(filters)))
        )
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Bulk delete entries created before cutoff; return rows removed.

        Core DELETE, so the ORM immutability guards on ActivityLog do not fire.
        """
        result = await self.db.execute(
            delete(ActivityLog).where(ActivityLog.created_at < cutoff)
        )
        return result.rowcount or 0


def activity_log_repository_scope(
    session_factory: async_sessionmaker[AsyncSession] | None,
):
    """Return a zero-arg factory of read scopes over the activity log.

    Each scope opens its own session. SQLAlchemy errors raised inside the
    scope surface as ActivityLogStoreUnavailableException.
    """

    @asynccontextmanager
    async def scope() -> AsyncIterator[ActivityLogRepository]:
        if session_factory is None:
            raise SqlNotConfiguredException()
        try:
            async with session_factory() as session:
                yield ActivityLogRepository(session)
        except SQLAlchemyError as e:
            raise ActivityLogStoreUnavailableException(str(e)) from e

    return scope
