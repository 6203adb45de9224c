"""
Turn any raised value into a transport-ready (status code, body) pair.

Classification order, first match wins:

    1. PortfolioError           -> status table by kind, body from to_payload()
    2. pydantic ValidationError -> 400 VALIDATION with the per-field issues
    3. body parse failure       -> 400 MALFORMED_INPUT
    4. token verification error -> 401 AUTHORIZATION, message passed through
    5. any other Exception      -> 500 SYSTEM with its message
    6. anything else            -> 500 SYSTEM with a generic message

Typed errors are matched first so their public message and details are
never flattened by the generic Exception branch.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import jwt
import pydantic

from .base import (
    ErrorKind,
    HTTP_STATUS_BY_KIND,
    MalformedInputError,
    PortfolioError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_SYSTEM_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class ErrorResponse:
    status_code: int
    body: dict[str, Any]


def issues_from_pydantic(exc: pydantic.ValidationError) -> list[dict[str, str]]:
    """Per-field issues in the order pydantic reported them."""
    return [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]


def _from_typed(error: PortfolioError) -> ErrorResponse:
    return ErrorResponse(HTTP_STATUS_BY_KIND[error.kind], error.to_payload())


def translate(error: object) -> ErrorResponse:
    if isinstance(error, PortfolioError):
        return _from_typed(error)

    if isinstance(error, pydantic.ValidationError):
        return _from_typed(ValidationError("Validation failed", details=issues_from_pydantic(error)))

    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
        return _from_typed(MalformedInputError(
            "Malformed request body",
            details={"originalError": str(error)},
        ))

    if isinstance(error, jwt.InvalidTokenError):
        return ErrorResponse(
            HTTP_STATUS_BY_KIND[ErrorKind.AUTHORIZATION],
            {"error": str(error) or "Invalid token", "type": ErrorKind.AUTHORIZATION.value},
        )

    if isinstance(error, Exception) and str(error):
        return ErrorResponse(
            HTTP_STATUS_BY_KIND[ErrorKind.SYSTEM],
            {"error": str(error), "type": ErrorKind.SYSTEM.value},
        )

    logger.warning("translator.unclassified_error", extra={"error_type": type(error).__name__})
    return ErrorResponse(
        HTTP_STATUS_BY_KIND[ErrorKind.SYSTEM],
        {"error": GENERIC_SYSTEM_MESSAGE, "type": ErrorKind.SYSTEM.value},
    )
