"""
Uniqueness pre-check run before every create and every identity-changing update.

One query finds any other record that shares the candidate's identity value,
derived slug or another unique field. The record being updated is excluded so
that saving an unchanged title does not collide with itself.

The check and the following write are not transactional. A concurrent insert
can still slip between them; the unique indexes catch that case and the
store error is mapped to the same Duplicity kind (see exceptions/mapper.py).
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_

from portfolio.database.base import Base
from portfolio.exceptions.base import DuplicityError
from portfolio.repositories.base_repository import BaseRepository
from .entities import EntitySpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    record: Base
    conflict_type: str


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class ConflictChecker:
    def __init__(self, spec: EntitySpec, repository: BaseRepository):
        self.spec = spec
        self.repository = repository

    async def find_conflict(
        self,
        identity_value: Any,
        candidate_slug: str | None = None,
        exclude_id: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> Conflict | None:
        """
        Return the colliding record and which field collided, or None.

        Precedence when several fields match the same record: identity field,
        then the entity's other unique fields, then slug.
        """
        model = self.spec.model
        extra = extra or {}

        clauses = []
        if identity_value is not None:
            clauses.append(getattr(model, self.spec.identity_field) == identity_value)
        for field_name, value in extra.items():
            clauses.append(getattr(model, field_name) == value)
        if self.spec.slug_field and candidate_slug is not None:
            clauses.append(getattr(model, self.spec.slug_field) == candidate_slug)
        if not clauses:
            return None

        criteria = [or_(*clauses)]
        if exclude_id is not None:
            criteria.append(model.id != exclude_id)

        record = await self.repository.find_one(*criteria)
        if record is None:
            return None

        conflict = Conflict(record, self._classify(record, identity_value, extra))
        logger.info(
            "conflict.found",
            extra={
                "entity": self.spec.name,
                "conflict_type": conflict.conflict_type,
                "conflicts_with": record.id,
                "exclude_id": exclude_id,
            },
        )
        return conflict

    def _classify(self, record: Base, identity_value: Any, extra: dict[str, Any]) -> str:
        if identity_value is not None and getattr(record, self.spec.identity_field) == identity_value:
            return self.spec.identity_field
        for field_name, value in extra.items():
            if getattr(record, field_name) == value:
                return field_name
        return self.spec.slug_field or self.spec.identity_field

    def to_error(
        self,
        conflict: Conflict,
        identity_value: Any,
        candidate_slug: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> DuplicityError:
        """Build the Duplicity error describing `conflict` for the caller."""
        spec = self.spec
        identity_key = _camel(spec.identity_field)
        record = conflict.record

        details: dict[str, Any] = {}
        if identity_value is not None:
            details[identity_key] = identity_value
        for field_name, value in (extra or {}).items():
            details[_camel(field_name)] = value
        if spec.slug_field:
            details["slug"] = candidate_slug
        details["conflictsWith"] = record.id
        details["conflictType"] = _camel(conflict.conflict_type)
        details[f"existing{identity_key[0].upper()}{identity_key[1:]}"] = getattr(record, spec.identity_field)
        if spec.slug_field:
            details["existingSlug"] = getattr(record, spec.slug_field)

        noun = spec.label.lower()
        article = "An" if noun[0] in "aeiou" else "A"
        return DuplicityError(
            f"{article} {noun} with the same {conflict.conflict_type.replace('_', ' ')} already exists",
            details=details,
        )
