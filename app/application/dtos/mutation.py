"""DTO describing one data-layer mutation so it can be intercepted generically."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from app.shared.enums import MutationKind

T = TypeVar("T")

# Fetches the current state of one entity for a {field: value} lookup.
BeforeFetcher = Callable[[Mapping[str, Any]], Awaitable[Any]]
# Queues a callback for the commit of the enclosing transaction; False when none is open.
CommitHook = Callable[[Callable[[], None]], bool]


@dataclass(frozen=True)
class Mutation(Generic[T]):
    """A create/update/delete (single or bulk) against one entity kind.

    execute runs the real operation. fetch_before, when given, loads the
    entity a single-row update/delete is about to change. criteria is the
    equality filter of update/delete operations. after_commit, when given,
    defers the activity record until the surrounding transaction commits.
    """

    kind: MutationKind
    entity_type: str
    execute: Callable[[], Awaitable[T]]
    criteria: Mapping[str, Any] | None = None
    fetch_before: BeforeFetcher | None = None
    primary_key: str = "id"
    after_commit: CommitHook | None = None
