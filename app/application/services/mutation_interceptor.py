"""Mutation interceptor: turns every data-layer mutation into an activity record.

One generic wrapper for all entity kinds and all mutation kinds. Call
sites describe the operation as a Mutation; the interceptor captures the
before state where needed, runs the real operation, diffs before/after
and hands the record to an activity sink. Mutations that run inside an
open transaction hand it over only after that transaction commits.

Failure policy: errors of the real operation propagate untouched and
produce no record. Errors while capturing state, diffing or submitting
are logged and swallowed; the caller always receives the real result.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any, TypeVar

from app.application.dtos.activity_log import PendingActivity
from app.application.services.change_diff import (
    diff_snapshots,
    is_scalar_like,
    masked_criteria,
    to_snapshot,
)
from app.shared.context import get_request_context
from app.shared.enums import MutationKind
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.mutation import Mutation
    from app.application.interfaces.services import IActivitySink
    from app.shared.context import RequestContext

T = TypeVar("T")

logger = get_logger(__name__)

# The activity log itself is never audited (it would audit its own writes).
ACTIVITY_LOG_ENTITY = "ActivityLog"


def resolve_lookup(
    criteria: Mapping[str, Any] | None, primary_key: str = "id"
) -> dict[str, Any] | None:
    """Return the {field: value} that identifies a single row in criteria.

    The primary key wins; otherwise a criteria made of exactly one scalar
    field (e.g. a unique email) is used. Anything else is not resolvable.
    """
    if not criteria:
        return None
    if criteria.get(primary_key) is not None:
        return {primary_key: criteria[primary_key]}
    if len(criteria) == 1:
        field, value = next(iter(criteria.items()))
        if value is not None and is_scalar_like(value):
            return {field: value}
    return None


def _key_value(snapshot: Mapping[str, Any] | None, primary_key: str) -> Any:
    if not snapshot:
        return None
    return snapshot.get(primary_key)


def _affected_count(result: Any) -> int | None:
    """Row count reported by a bulk operation (int, .count, .rowcount or {'count'})."""
    if isinstance(result, bool):
        return None
    if isinstance(result, int):
        return result
    if isinstance(result, Mapping):
        count = result.get("count")
        return count if isinstance(count, int) else None
    for attr in ("count", "rowcount"):
        count = getattr(result, attr, None)
        if isinstance(count, int):
            return count
    return None


class MutationInterceptor:
    """Observes create/update/delete/updateMany/deleteMany for any entity kind."""

    def __init__(
        self,
        sink: IActivitySink | None,
        *,
        excluded_entity_types: Iterable[str] = (),
    ) -> None:
        self._sink = sink
        self._excluded = frozenset(excluded_entity_types) | {ACTIVITY_LOG_ENTITY}

    def intercepts(self, mutation: Mutation[Any]) -> bool:
        return self._sink is not None and mutation.entity_type not in self._excluded

    async def run(self, mutation: Mutation[T]) -> T:
        """Execute mutation and record it. Returns exactly what execute returned."""
        if not self.intercepts(mutation):
            return await mutation.execute()

        context = get_request_context()
        before = None
        if mutation.kind in (MutationKind.UPDATE, MutationKind.DELETE):
            before = await self._capture_before(mutation)

        result = await mutation.execute()

        try:
            activity = self._build_activity(mutation, before, result)
            if activity is not None:
                await self._dispatch(mutation, activity, context)
        except Exception as e:
            logger.warning(
                "Failed to record activity for %s.%s: %s",
                mutation.entity_type,
                mutation.kind.value,
                e,
                exc_info=True,
            )
        return result

    async def _dispatch(
        self,
        mutation: Mutation[Any],
        activity: PendingActivity,
        context: RequestContext | None,
    ) -> None:
        """Submit now, or once the enclosing transaction commits (dropped on rollback)."""
        sink = self._sink
        if sink is None:
            return
        if mutation.after_commit is not None and mutation.after_commit(
            partial(sink.schedule, activity, context)
        ):
            return
        await sink.submit(activity, context)

    async def _capture_before(self, mutation: Mutation[Any]) -> dict[str, Any] | None:
        """Snapshot of the row about to change; None when unknown or unreadable."""
        if mutation.fetch_before is None:
            return None
        lookup = resolve_lookup(mutation.criteria, mutation.primary_key)
        if lookup is None:
            return None
        try:
            return to_snapshot(await mutation.fetch_before(lookup))
        except Exception as e:
            logger.warning(
                "Could not load %s before %s; recording without old values: %s",
                mutation.entity_type,
                mutation.kind.value,
                e,
                exc_info=True,
            )
            return None

    def _build_activity(
        self,
        mutation: Mutation[Any],
        before: dict[str, Any] | None,
        result: Any,
    ) -> PendingActivity | None:
        """Record for one finished mutation, or None when nothing auditable happened."""
        action = f"{mutation.entity_type.upper()}_{mutation.kind.action_suffix}"
        pk = mutation.primary_key
        lookup = resolve_lookup(mutation.criteria, pk) or {}
        criteria_key = next(iter(lookup.values()), None)

        if mutation.kind.is_bulk:
            return PendingActivity(
                action=action,
                entity_type=mutation.entity_type,
                entity_id=None,
                changes={
                    "where": {"old": None, "new": masked_criteria(mutation.criteria)},
                    "count": {"old": None, "new": _affected_count(result)},
                },
            )

        if mutation.kind is MutationKind.CREATE:
            after = to_snapshot(result)
            changes = diff_snapshots(None, after)
            if not changes:
                return None
            entity_id = _key_value(after, pk)
        elif mutation.kind is MutationKind.UPDATE:
            after = to_snapshot(result)
            changes = diff_snapshots(before, after)
            if not changes:
                return None
            entity_id = _key_value(after, pk)
            if entity_id is None:
                entity_id = criteria_key
        else:
            # Deletions are always recorded, even with nothing observable to diff.
            changes = diff_snapshots(before, None)
            entity_id = _key_value(before, pk)
            if entity_id is None:
                entity_id = criteria_key

        return PendingActivity(
            action=action,
            entity_type=mutation.entity_type,
            entity_id=None if entity_id is None else str(entity_id),
            changes=changes,
        )
