"""Club repository (audited)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infrastructure.persistence.models.club import Club
from app.infrastructure.persistence.repositories.auditable_repo import AuditableRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.application.services.mutation_interceptor import MutationInterceptor


class ClubRepository(AuditableRepository[Club]):
    def __init__(
        self, db: AsyncSession, interceptor: MutationInterceptor | None = None
    ) -> None:
        super().__init__(db, Club, interceptor)
