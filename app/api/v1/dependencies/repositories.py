"""Audited repository dependencies (composition root).

Each repository shares the request's transactional session and the
process-wide MutationInterceptor, so every write is recorded.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies.activity_log import get_mutation_interceptor
from app.application.services.mutation_interceptor import MutationInterceptor
from app.infrastructure.persistence.database import get_db_transactional
from app.infrastructure.persistence.repositories import (
    ClubRepository,
    PlayerRepository,
    UserRepository,
)

Session = Annotated[AsyncSession, Depends(get_db_transactional)]
Interceptor = Annotated[MutationInterceptor | None, Depends(get_mutation_interceptor)]


async def get_user_repository(db: Session, interceptor: Interceptor) -> UserRepository:
    return UserRepository(db, interceptor)


async def get_club_repository(db: Session, interceptor: Interceptor) -> ClubRepository:
    return ClubRepository(db, interceptor)


async def get_player_repository(
    db: Session, interceptor: Interceptor
) -> PlayerRepository:
    return PlayerRepository(db, interceptor)
