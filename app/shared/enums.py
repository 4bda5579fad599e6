"""Shared enumerations for the LeagueDesk application.

Cross-cutting enums used by application and infrastructure (activity
log, data-layer mutations, query ordering).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class MutationKind(_ValuesMixin, str, Enum):
    """Data-layer mutation primitives observed by the activity log."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    UPDATE_MANY = "updateMany"
    DELETE_MANY = "deleteMany"

    @property
    def action_suffix(self) -> str:
        """Suffix used in activity actions, e.g. CLUB_UPDATEMANY."""
        return self.value.upper()

    @property
    def is_bulk(self) -> bool:
        return self in (MutationKind.UPDATE_MANY, MutationKind.DELETE_MANY)


class SortOrder(_ValuesMixin, str, Enum):
    """Sort direction for activity log listing (by created_at)."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str | None) -> "SortOrder":
        """Lenient parse: 'asc' (any case) is ascending, anything else descending."""
        if raw is not None and str(raw).strip().lower() == cls.ASC.value:
            return cls.ASC
        return cls.DESC
