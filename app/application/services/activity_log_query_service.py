"""Read path over the activity log: paginated, filterable, administrators only."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING

from app.application.dtos.activity_log import (
    ActivityLogFilters,
    ActivityLogPage,
    PageRequest,
)
from app.domain.exceptions import AuthorizationException
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IActivityLogRepository

RepositoryScope = Callable[[], AbstractAsyncContextManager["IActivityLogRepository"]]


class ActivityLogQueryService:
    """Lists activity log entries for administrators.

    The repository is opened through repository_scope only after the
    caller's role has been checked, so unauthorized callers never reach
    the store.
    """

    def __init__(self, repository_scope: RepositoryScope, *, admin_role: str = "admin") -> None:
        self._repository_scope = repository_scope
        self._admin_role = admin_role.lower()

    def is_admin(self, role: str | None) -> bool:
        return (role or "").strip().lower() == self._admin_role

    @traced("activity_log.query")
    async def list(
        self,
        caller_role: str | None,
        filters: ActivityLogFilters,
        page: PageRequest,
    ) -> ActivityLogPage:
        """Return one page of entries matching filters, newest first by default.

        Raises:
            AuthorizationException: caller is not an administrator.
            SqlNotConfiguredException: no SQL store configured.
            ActivityLogStoreUnavailableException: the store failed the query.
        """
        if not self.is_admin(caller_role):
            raise AuthorizationException(resource="activity_log", action="read")
        async with self._repository_scope() as repo:
            records = await repo.list(filters, page)
            total = await repo.count(filters)
        return ActivityLogPage(
            records=records,
            page=page.page,
            limit=page.limit,
            total_count=total,
        )
