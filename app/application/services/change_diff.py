"""Field-level change sets between two flat snapshots of an entity.

Only scalar-like values (None, bool, numbers, strings, dates/times,
UUIDs) take part in a diff. Any key holding a nested object or list on
either side (relations, included sub-entities, JSON columns) is skipped,
so related data never ends up in an activity log entry.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import inspect as sa_inspect

from app.shared.utils.masking import mask_value

ChangeSet = dict[str, dict[str, Any]]

_SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    Decimal,
    str,
    datetime,
    date,
    time,
    UUID,
)


def is_scalar_like(value: Any) -> bool:
    """True for None and the closed set of primitive kinds an audit may record."""
    return value is None or isinstance(value, _SCALAR_TYPES)


def normalize(value: Any) -> Any:
    """Canonical comparable form: ISO strings for temporal values, str for Decimal/UUID."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    return value


def to_snapshot(obj: Any) -> dict[str, Any] | None:
    """Flat key/value view of an entity.

    Mapped ORM instances contribute their column attributes only (never
    relationships); mappings and dataclasses are copied shallowly.
    """
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return dict(obj)
    state = sa_inspect(obj, raiseerr=False)
    if state is not None and getattr(state, "mapper", None) is not None:
        return {attr.key: getattr(obj, attr.key) for attr in state.mapper.column_attrs}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    return dict(vars(obj))


def _masked(field: str, value: Any) -> Any:
    # Nothing to hide in an absent value.
    return None if value is None else mask_value(field, value)


def diff_snapshots(
    before: Mapping[str, Any] | None,
    after: Mapping[str, Any] | None,
) -> ChangeSet:
    """Return {field: {"old": ..., "new": ...}} for every scalar field that changed.

    before=None describes a creation (every present field appears with
    old=None); after=None describes a deletion (new=None). Unchanged keys
    are omitted, so an empty result means nothing auditable changed.
    """
    old_side = before or {}
    new_side = after or {}
    keys = list(dict.fromkeys([*old_side.keys(), *new_side.keys()]))
    changes: ChangeSet = {}
    for key in keys:
        old_raw = old_side.get(key)
        new_raw = new_side.get(key)
        if not is_scalar_like(old_raw) or not is_scalar_like(new_raw):
            continue
        old_value = normalize(old_raw)
        new_value = normalize(new_raw)
        if old_value != new_value or _type_changed(old_value, new_value):
            changes[key] = {
                "old": _masked(key, old_value),
                "new": _masked(key, new_value),
            }
    return changes


def _type_changed(old: Any, new: Any) -> bool:
    """1 == True and 0 == False in Python; a bool/int swap is still a change."""
    return isinstance(old, bool) != isinstance(new, bool) and old is not None and new is not None


def masked_criteria(criteria: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Display-safe copy of an equality filter, masked like a change set.

    Non-scalar filter values are left out, as they are in diffs.
    """
    if not criteria:
        return None
    return {
        field: _masked(field, normalize(value))
        for field, value in criteria.items()
        if is_scalar_like(value)
    }
