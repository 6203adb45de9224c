"""
The single catch site wrapped around every service operation.

Typed errors are logged and re-raised unchanged. Anything else is logged with
its stack trace and wrapped into a SystemFailureError whose public message is
a generic apology; the original text only travels in `internal_message`.
"""

import logging
from contextlib import asynccontextmanager

from .base import ErrorKind, PortfolioError, SystemFailureError

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = "An unexpected error occurred. Please try again later."


def describe_unknown(error: BaseException | object) -> str:
    """Readable text for values that carry no useful message of their own."""
    text = str(error)
    if not text or (text.startswith("<") and text.endswith(">")):
        return f"{type(error).__name__}: {error!r}"
    return text


@asynccontextmanager
async def operation_boundary(entity: str, operation: str):
    try:
        yield
    except PortfolioError as exc:
        level = logging.WARNING if exc.kind is ErrorKind.SYSTEM else logging.INFO
        logger.log(
            level,
            f"{entity}.{operation}.failed",
            extra={
                "entity": entity,
                "operation": operation,
                "kind": exc.kind.value,
                "internal_message": exc.internal_message,
            },
        )
        raise
    except Exception as exc:
        logger.exception(
            f"{entity}.{operation}.unexpected_error",
            extra={"entity": entity, "operation": operation},
        )
        raise SystemFailureError(
            APOLOGY_MESSAGE,
            details={"entity": entity, "operation": operation},
            internal_message=describe_unknown(exc),
        ) from exc
