"""Activity log writer: attributes a finished mutation and appends it.

The write runs in its own session and transaction, never the business
one, and never raises: every failure is logged and dropped.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.activity_log import ActivityLogEntryCreate
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from app.shared.context import RequestContext, get_request_context
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

logger = get_logger(__name__)

UNKNOWN = "UNKNOWN"
# Entity kind whose freshly created id identifies a self-registering actor.
IDENTITY_ENTITY = "User"


@dataclass
class ActorAttribution:
    """Who to blame for one record; each field independently optional."""

    actor_id: str | None = None
    actor_name: str | None = None
    actor_email: str | None = None
    actor_role: str | None = None

    @property
    def complete(self) -> bool:
        return None not in (self.actor_id, self.actor_name, self.actor_role)


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_changes(changes: Any) -> str | None:
    """Stable string form of changes; None when they cannot be serialized."""
    if changes is None or isinstance(changes, str):
        return changes
    try:
        return json.dumps(changes, default=_json_default, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning("Activity changes not serializable, storing without them: %s", e)
        return None


def _blank_to_unknown(value: str | None) -> str:
    return value.strip() if value and value.strip() else UNKNOWN


class ActivityLogWriter:
    """Implements IActivityLogWriter over a session factory.

    A None session factory means no SQL store is configured; writes are
    then skipped silently.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None,
        *,
        resolve_claimed_actor: bool = True,
    ) -> None:
        self._session_factory = session_factory
        self._resolve_claimed_actor = resolve_claimed_actor

    @traced("activity_log.write")
    async def write(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None,
        changes: object,
        *,
        context: RequestContext | None = None,
    ) -> None:
        """Append one record. Never raises."""
        if self._session_factory is None:
            return
        try:
            ctx = context if context is not None else get_request_context()
            actor = await self.resolve_actor(ctx, entity_type, entity_id)
            entry = ActivityLogEntryCreate(
                action=_blank_to_unknown(action),
                entity_type=_blank_to_unknown(entity_type),
                entity_id=entity_id,
                actor_id=actor.actor_id,
                actor_name=actor.actor_name,
                actor_email=actor.actor_email,
                actor_role=actor.actor_role,
                ip_address=ctx.ip_address if ctx else None,
                user_agent=ctx.user_agent if ctx else None,
                changes=serialize_changes(changes),
            )
            async with self._session_factory() as session:
                async with session.begin():
                    await ActivityLogRepository(session).create(entry)
            logger.debug("Activity recorded: %s %s", entry.action, entity_id)
        except Exception as e:
            logger.warning(
                "Failed to write activity log for %s (%s): %s",
                action,
                entity_id,
                e,
                exc_info=True,
            )

    async def resolve_actor(
        self,
        ctx: RequestContext | None,
        entity_type: str,
        entity_id: str | None,
    ) -> ActorAttribution:
        """Attribution in priority order: token identity, body hints, identity store."""
        actor = ActorAttribution()
        if ctx is not None:
            actor = ActorAttribution(
                actor_id=ctx.actor_id,
                actor_name=ctx.actor_name,
                actor_email=ctx.actor_email,
                actor_role=ctx.actor_role,
            )
            if not ctx.is_authenticated:
                actor.actor_email = actor.actor_email or ctx.claimed_email
                actor.actor_name = actor.actor_name or ctx.claimed_name

        if actor.actor_id is None and entity_type == IDENTITY_ENTITY and entity_id:
            # Self-registration: the new user is the actor.
            actor.actor_id = entity_id

        if actor.actor_email and not actor.complete and self._may_lookup(ctx):
            await self._backfill_from_identity_store(actor)
        return actor

    def _may_lookup(self, ctx: RequestContext | None) -> bool:
        if ctx is not None and ctx.is_authenticated:
            return True
        return self._resolve_claimed_actor

    async def _backfill_from_identity_store(self, actor: ActorAttribution) -> None:
        if self._session_factory is None:
            return
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(User.id, User.name, User.role).where(
                        User.email == actor.actor_email
                    )
                )
                row = result.first()
        except Exception as e:
            logger.debug("Actor lookup by email failed: %s", e)
            return
        if row is None:
            return
        actor.actor_id = actor.actor_id or row.id
        actor.actor_name = actor.actor_name or row.name
        actor.actor_role = actor.actor_role or row.role
