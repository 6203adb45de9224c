"""
The validated-mutation pipeline, shared by every entity.

Each write runs the same steps in the same order and stops at the first
failure:

    create: validate -> derive slug -> check conflicts -> hash secrets -> insert -> commit
    update: validate id -> validate -> [derive slug -> check conflicts] -> hash secrets
            -> atomic update (NotFound on no match) -> commit
    delete: validate id -> atomic delete (NotFound on no match) -> commit

The bracketed update steps only run when the caller changes the identity
field (or, for admins, another unique field). Slug regeneration and password
hashing are explicit steps here rather than model hooks.

Every operation is wrapped by `operation_boundary`, which lets typed errors
through unchanged and turns anything else into a SystemFailureError.
"""

import logging
import math
import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.security import hash_password
from portfolio.exceptions.base import NotFoundError
from portfolio.exceptions.boundary import operation_boundary
from portfolio.repositories.base_repository import BaseRepository
from portfolio.schemas.base import Page, ReadSchema
from portfolio.utils.slugify import slugify
from portfolio.validators.schema_validator import validate, validate_id
from .conflicts import ConflictChecker
from .entities import EntitySpec

logger = logging.getLogger(__name__)


class MutationService:
    def __init__(self, spec: EntitySpec, db: AsyncSession, repository: BaseRepository | None = None):
        self.spec = spec
        self.db = db
        self.repository = repository or BaseRepository(spec.model, db, spec.label)
        self.conflicts = ConflictChecker(spec, self.repository)

    # ------------------------
    # Writes
    # ------------------------

    async def create(self, payload: Any) -> ReadSchema:
        async with operation_boundary(self.spec.name, "create"):
            start = time.perf_counter()
            data = validate(self.spec.create_schema, payload, self.spec.label)
            values = data.create_values()

            await self._ensure_unique(values)
            self._hash_secrets(values)

            record = await self.repository.create(**values)
            await self.repository.commit()

            logger.info(
                "mutation.create.success",
                extra={
                    "entity": self.spec.name,
                    "id": record.id,
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            return self._read(record)

    async def update(self, entity_id: Any, payload: Any) -> ReadSchema:
        async with operation_boundary(self.spec.name, "update"):
            start = time.perf_counter()
            entity_id = validate_id(entity_id)
            data = validate(self.spec.update_schema, payload, self.spec.label)
            values = data.provided_values()

            await self._ensure_unique(values, exclude_id=entity_id)
            self._hash_secrets(values)

            record = await self.repository.update_by_id(entity_id, values)
            if record is None:
                raise NotFoundError(f"{self.spec.label} not found", details={"id": entity_id})
            await self.repository.commit()

            logger.info(
                "mutation.update.success",
                extra={
                    "entity": self.spec.name,
                    "id": entity_id,
                    "fields": sorted(values),
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            return self._read(record)

    async def delete(self, entity_id: Any) -> ReadSchema:
        async with operation_boundary(self.spec.name, "delete"):
            entity_id = validate_id(entity_id)

            record = await self.repository.delete_by_id(entity_id)
            if record is None:
                raise NotFoundError(f"{self.spec.label} not found", details={"id": entity_id})
            await self.repository.commit()

            logger.info(
                "mutation.delete.success",
                extra={
                    "entity": self.spec.name,
                    "id": entity_id,
                    "identity": getattr(record, self.spec.identity_field),
                },
            )
            return self._read(record)

    # ------------------------
    # Reads
    # ------------------------

    async def get_by_id(self, entity_id: Any) -> ReadSchema:
        async with operation_boundary(self.spec.name, "get_by_id"):
            entity_id = validate_id(entity_id)
            record = await self.repository.get_by_id(entity_id)
            if record is None:
                raise NotFoundError(f"{self.spec.label} not found", details={"id": entity_id})
            return self._read(record)

    async def get_by_slug(self, slug: str) -> ReadSchema:
        """Fetch by slug; entities with a view counter count the read."""
        async with operation_boundary(self.spec.name, "get_by_slug"):
            if self.spec.slug_field is None:
                raise NotFoundError(f"{self.spec.label} not found", details={"slug": slug})

            record = await self.repository.find_one(getattr(self.spec.model, self.spec.slug_field) == slug)
            if record is None:
                raise NotFoundError(f"{self.spec.label} not found", details={"slug": slug})

            if self.spec.view_counter:
                record = await self.repository.increment(record.id, self.spec.view_counter)
                if record is None:
                    # deleted between the lookup and the increment
                    raise NotFoundError(f"{self.spec.label} not found", details={"slug": slug})
                await self.repository.commit()

            return self._read(record)

    async def list_page(self, query: Any = None) -> Page:
        """
        One page of records, newest first.

        An empty result is a normal page with `total == 0`, never NotFound.
        """
        async with operation_boundary(self.spec.name, "list"):
            params = validate(self.spec.query_schema, query or {}, f"{self.spec.label} listing")
            criteria = [getattr(self.spec.model, name) == value for name, value in params.filters().items()]

            total = await self.repository.count(*criteria)
            records = await self.repository.list_page((params.page - 1) * params.limit, params.limit, *criteria)

            return Page[self.spec.read_schema](
                items=[self._read(record) for record in records],
                total=total,
                page=params.page,
                total_pages=math.ceil(total / params.limit) if total else 0,
            )

    # ------------------------
    # Pipeline steps
    # ------------------------

    def _derive_slug(self, values: dict[str, Any]) -> str | None:
        """Set the slug from the identity field when the identity field is being written."""
        if self.spec.slug_field is None or self.spec.identity_field not in values:
            return None
        slug = slugify(values[self.spec.identity_field])
        values[self.spec.slug_field] = slug
        return slug

    async def _ensure_unique(self, values: dict[str, Any], exclude_id: str | None = None) -> None:
        identity = values.get(self.spec.identity_field)
        extra = {name: values[name] for name in self.spec.unique_fields if name in values}
        if identity is None and not extra:
            return

        slug = self._derive_slug(values)
        conflict = await self.conflicts.find_conflict(identity, slug, exclude_id=exclude_id, extra=extra)
        if conflict is not None:
            raise self.conflicts.to_error(conflict, identity, slug, extra)

    def _hash_secrets(self, values: dict[str, Any]) -> None:
        for name in self.spec.secret_fields:
            if name in values:
                values[name] = hash_password(values[name])

    def _read(self, record) -> ReadSchema:
        return self.spec.read_schema.model_validate(record)
