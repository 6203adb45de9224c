"""
Generic persistence adapter used by every entity.

The capability set is deliberately small: find one by predicate, get by id,
create, update by id, delete by id, count, page, and an atomic counter bump.
Update and delete each run as a single `UPDATE/DELETE ... RETURNING`
statement, so they are atomic per row and report absence as `None`.

All statements run inside `db_error_handler`, which rolls back and turns
store failures into typed errors (unique violations into Duplicity).
"""
import logging
import time
from typing import Any, Generic, Sequence, Type, TypeVar

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database.base import Base
from portfolio.exceptions.base import SystemFailureError
from portfolio.exceptions.mapper import db_error_handler
from portfolio.validators.model_validators import find_unknown_model_kwargs

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession, label: str | None = None):
        self.model = model
        self.db = db
        self.label = label or model.__name__

    def _errors(self):
        return db_error_handler(self.db, self.label, self.model.__tablename__)

    def _reject_unknown(self, values: dict[str, Any], operation: str) -> None:
        unknown = find_unknown_model_kwargs(self.model, values)
        if unknown:
            raise SystemFailureError(
                internal_message=f"{operation}: unknown field(s) for {self.model.__name__}: {', '.join(unknown)}",
            )

    async def find_one(self, *criteria: ColumnElement[bool]) -> ModelType | None:
        async with self._errors():
            result = await self.db.execute(select(self.model).where(*criteria).limit(1))
            return result.scalars().first()

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        async with self._errors():
            return await self.db.get(self.model, entity_id)

    async def create(self, **values: Any) -> ModelType:
        logger.debug(
            "repo.create.start",
            extra={"model": self.model.__name__, "provided_keys": sorted(values)},
        )
        self._reject_unknown(values, "create")
        start = time.perf_counter()

        async with self._errors():
            entity = self.model(**values)
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.debug(
            "repo.create.success",
            extra={
                "model": self.model.__name__,
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def update_by_id(self, entity_id: str, values: dict[str, Any]) -> ModelType | None:
        """
        Apply `values` to the row with `entity_id` in one statement.

        Returns the post-update row, or None when no row matched. An empty
        `values` still touches the row so absence is detected the same way.
        """
        self._reject_unknown(values, "update")
        values = dict(values) or {"updated_at": func.now()}

        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        async with self._errors():
            result = await self.db.execute(stmt)
            entity = result.scalars().first()

        logger.debug(
            "repo.update.done",
            extra={"model": self.model.__name__, "id": entity_id, "matched": entity is not None,
                   "fields": sorted(values)},
        )
        return entity

    async def delete_by_id(self, entity_id: str) -> ModelType | None:
        """Delete the row and return its last state, or None when no row matched."""
        stmt = (
            delete(self.model)
            .where(self.model.id == entity_id)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        async with self._errors():
            result = await self.db.execute(stmt)
            entity = result.scalars().first()

        if entity is not None:
            # RETURNING leaves the row in the identity map; later reads must miss.
            self.db.expunge(entity)

        logger.debug(
            "repo.delete.done",
            extra={"model": self.model.__name__, "id": entity_id, "matched": entity is not None},
        )
        return entity

    async def increment(self, entity_id: str, field: str, amount: int = 1) -> ModelType | None:
        column = getattr(self.model, field)
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values({field: column + amount})
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        async with self._errors():
            result = await self.db.execute(stmt)
            return result.scalars().first()

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        async with self._errors():
            result = await self.db.execute(
                select(func.count()).select_from(self.model).where(*criteria)
            )
            return int(result.scalar_one())

    async def list_page(self, offset: int, limit: int, *criteria: ColumnElement[bool]) -> Sequence[ModelType]:
        """Newest first, then id for a stable order within the same timestamp."""
        query = (
            select(self.model)
            .where(*criteria)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._errors():
            result = await self.db.execute(query)
            return result.scalars().all()

    async def commit(self) -> None:
        async with self._errors():
            await self.db.commit()
