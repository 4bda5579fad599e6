"""Base repository: generic reads and Prisma-style mutation primitives.

Every mutation is described as a Mutation and executed through _run, the
single seam subclasses override to observe writes (see AuditableRepository).
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, delete, inspect as sa_inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.mutation import Mutation
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.transaction_hooks import run_after_commit
from app.shared.enums import MutationKind


ModelType = TypeVar("ModelType", bound=Base)
T = TypeVar("T")


class BaseRepository(Generic[ModelType]):
    """Base repository with reads, create/update/delete and bulk variants.

    Criteria ("where") are equality filters: {column_name: value}.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    @property
    def entity_type(self) -> str:
        """Logical entity name used in activity actions (model class name)."""
        return self.model.__name__

    @property
    def primary_key(self) -> str:
        return sa_inspect(self.model).primary_key[0].key

    def _conditions(self, criteria: Mapping[str, Any]) -> list[Any]:
        conditions = []
        for field, value in criteria.items():
            column = getattr(self.model, field, None)
            if column is None:
                raise ValueError(f"{self.model.__name__} has no column '{field}'")
            conditions.append(column == value)
        return conditions

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.find_unique({self.primary_key: entity_id})

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with pagination."""
        result = await self.db.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def find_unique(self, criteria: Mapping[str, Any]) -> ModelType | None:
        """Return the single record matching criteria, or None."""
        result = await self.db.execute(
            select(self.model).where(and_(*self._conditions(criteria)))
        )
        return result.scalar_one_or_none()

    async def _require(self, criteria: Mapping[str, Any]) -> ModelType:
        obj = await self.find_unique(criteria)
        if obj is None:
            ref = ",".join(f"{k}={v}" for k, v in criteria.items())
            raise ResourceNotFoundException(self.model.__name__, ref)
        return obj

    async def create(self, data: Mapping[str, Any]) -> ModelType:
        """Insert a new record from column values and return it refreshed."""

        async def execute() -> ModelType:
            obj = self.model(**data)
            self.db.add(obj)
            await self.db.flush()
            await self.db.refresh(obj)
            return obj

        return await self._run(
            Mutation(
                MutationKind.CREATE,
                self.entity_type,
                execute,
                primary_key=self.primary_key,
                after_commit=self._after_commit,
            )
        )

    async def update(
        self, where: Mapping[str, Any], data: Mapping[str, Any]
    ) -> ModelType:
        """Set column values on the record matching where.

        Raises:
            ResourceNotFoundException: no record matches where.
        """

        async def execute() -> ModelType:
            obj = await self._require(where)
            for field, value in data.items():
                setattr(obj, field, value)
            await self.db.flush()
            await self.db.refresh(obj)
            return obj

        return await self._run(self._single(MutationKind.UPDATE, where, execute))

    async def delete(self, where: Mapping[str, Any]) -> ModelType:
        """Delete the record matching where and return it.

        Raises:
            ResourceNotFoundException: no record matches where.
        """

        async def execute() -> ModelType:
            obj = await self._require(where)
            await self.db.delete(obj)
            await self.db.flush()
            return obj

        return await self._run(self._single(MutationKind.DELETE, where, execute))

    async def update_many(
        self, where: Mapping[str, Any], data: Mapping[str, Any]
    ) -> int:
        """Set column values on every record matching where; return affected rows."""

        async def execute() -> int:
            stmt = (
                update(self.model)
                .where(and_(*self._conditions(where)))
                .values(**data)
                .execution_options(synchronize_session="evaluate")
            )
            result = await self.db.execute(stmt)
            return result.rowcount

        return await self._run(
            Mutation(
                MutationKind.UPDATE_MANY,
                self.entity_type,
                execute,
                criteria=where,
                after_commit=self._after_commit,
            )
        )

    async def delete_many(self, where: Mapping[str, Any]) -> int:
        """Delete every record matching where; return affected rows."""

        async def execute() -> int:
            stmt = (
                delete(self.model)
                .where(and_(*self._conditions(where)))
                .execution_options(synchronize_session="evaluate")
            )
            result = await self.db.execute(stmt)
            return result.rowcount

        return await self._run(
            Mutation(
                MutationKind.DELETE_MANY,
                self.entity_type,
                execute,
                criteria=where,
                after_commit=self._after_commit,
            )
        )

    def _single(
        self,
        kind: MutationKind,
        where: Mapping[str, Any],
        execute: Callable[[], Awaitable[ModelType]],
    ) -> Mutation[ModelType]:
        return Mutation(
            kind,
            self.entity_type,
            execute,
            criteria=where,
            fetch_before=self.find_unique,
            primary_key=self.primary_key,
            after_commit=self._after_commit,
        )

    def _after_commit(self, callback: Callable[[], None]) -> bool:
        return run_after_commit(self.db, callback)

    async def _run(self, mutation: Mutation[T]) -> T:
        """Execute a mutation. Override to observe writes."""
        return await mutation.execute()
