"""Player repository (audited)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from app.infrastructure.persistence.models.player import Player
from app.infrastructure.persistence.repositories.auditable_repo import AuditableRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.application.services.mutation_interceptor import MutationInterceptor


class PlayerRepository(AuditableRepository[Player]):
    def __init__(
        self, db: AsyncSession, interceptor: MutationInterceptor | None = None
    ) -> None:
        super().__init__(db, Player, interceptor)

    async def list_by_club(self, club_id: str) -> list[Player]:
        """Return the players registered with a club."""
        result = await self.db.execute(
            select(Player).where(Player.club_id == club_id).order_by(Player.name)
        )
        return list(result.scalars().all())
