"""
Classify raw SQLAlchemy IntegrityErrors into constraint categories.

The categories are an internal label only. `mapper.py` turns them into the
public typed errors (`DuplicityError`, `SystemFailureError`).
"""

import logging
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintViolation(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_VIOLATION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: ConstraintViolation.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION: ConstraintViolation.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ConstraintViolation.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION: ConstraintViolation.CHECK,
}

_MESSAGE_KEYWORDS: list[tuple[ConstraintViolation, tuple[str, ...]]] = [
    (ConstraintViolation.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintViolation.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintViolation.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintViolation.CHECK, ("check constraint", "check failed")),
]


def _classify_from_postgres_diag(orig) -> tuple[ConstraintViolation | None, str | None]:
    """
    Classify using the SQLSTATE exposed by the driver.

    psycopg exposes `pgcode`; the asyncpg adapter exposes `pgcode` and `sqlstate`.
    """
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None
    constraint_name = constraint_name or getattr(orig, "constraint_name", None)

    violation = PGCODE_VIOLATION_MAP.get(pgcode)
    if violation is not None:
        logger.debug(
            "integrity.postgres_diagnostic",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return violation, constraint_name

    logger.warning(
        "integrity.unknown_pgcode",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return ConstraintViolation.UNKNOWN, constraint_name


def _classify_from_generic_message(msg: str) -> ConstraintViolation:
    """Fallback for SQLite, MySQL and anything without a SQLSTATE."""
    normalized = (msg or "").lower()
    for violation, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return violation

    logger.warning("integrity.unknown_message", extra={"message_snippet": normalized[:200]})
    return ConstraintViolation.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintViolation, str | None]:
    """
    Heuristically classify an IntegrityError.

    Returns:
        (ConstraintViolation, constraint name if the driver reported one)
    """
    orig = exc.orig

    violation, constraint_name = _classify_from_postgres_diag(orig)
    if violation is not None:
        return violation, constraint_name

    return _classify_from_generic_message(str(orig) if orig is not None else str(exc)), None
