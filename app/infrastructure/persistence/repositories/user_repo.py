"""User repository: identity store lookups and audited user writes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.auditable_repo import AuditableRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.application.services.mutation_interceptor import MutationInterceptor


class UserRepository(AuditableRepository[User]):
    """Users of the association back office."""

    def __init__(
        self, db: AsyncSession, interceptor: MutationInterceptor | None = None
    ) -> None:
        super().__init__(db, User, interceptor)

    async def get_by_email(self, email: str) -> User | None:
        """Return the user with this email, or None."""
        return await self.find_unique({"email": email})
