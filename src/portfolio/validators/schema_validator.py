"""
Parse untrusted input into a schema instance or fail with a typed ValidationError.
"""

import logging
from typing import Any, TypeVar

import pydantic

from portfolio.exceptions.base import ValidationError
from portfolio.exceptions.translator import issues_from_pydantic
from portfolio.schemas.base import IdParam

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=pydantic.BaseModel)


def validate(schema: type[SchemaType], raw: Any, context: str) -> SchemaType:
    """
    Validate `raw` against `schema`.

    On failure the ValidationError details list one `{"field", "message"}`
    entry per issue, in the order pydantic reports them. Unknown keys are
    dropped by the schemas themselves.
    """
    try:
        return schema.model_validate(raw)
    except pydantic.ValidationError as exc:
        issues = issues_from_pydantic(exc)
        logger.info(
            "validation.failed",
            extra={"context": context, "fields": [issue["field"] for issue in issues]},
        )
        raise ValidationError(f"Validation failed for {context}", details=issues) from exc


def validate_id(raw: Any) -> str:
    """Validate a 24-character hex identifier; used by every by-id operation."""
    return validate(IdParam, {"id": raw}, "id").id.lower()
