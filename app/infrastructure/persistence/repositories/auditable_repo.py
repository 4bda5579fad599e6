"""Auditable repository: every mutation goes through the MutationInterceptor.

Extends BaseRepository by overriding its single write seam (_run). The
interceptor is injected (no lazy init); when it is None the repository
behaves exactly like BaseRepository and nothing is recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.repositories.base import BaseRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.application.dtos.mutation import Mutation
    from app.application.services.mutation_interceptor import MutationInterceptor

ModelType = TypeVar("ModelType", bound=Base)
T = TypeVar("T")


class AuditableRepository(BaseRepository[ModelType]):
    """Repository whose create/update/delete/update_many/delete_many are audited.

    Pass interceptor in constructor when auditing is needed (DIP).
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        interceptor: MutationInterceptor | None = None,
    ) -> None:
        super().__init__(db, model)
        self._interceptor = interceptor

    @property
    def interceptor(self) -> MutationInterceptor | None:
        """Injected interceptor (read-only)."""
        return self._interceptor

    async def _run(self, mutation: Mutation[T]) -> T:
        if self._interceptor is None:
            return await mutation.execute()
        return await self._interceptor.run(mutation)
