import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import classify_integrity_error, ConstraintViolation
from .base import DuplicityError, PortfolioError, SystemFailureError

logger = logging.getLogger(__name__)

STORE_FAILURE_MESSAGE = "Something went wrong while saving your changes. Please try again later."

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Extract column names from Postgres messages:
      - 'null value in column "title" violates not-null constraint'
      - 'DETAIL:  Key (slug)=(my-first-post) already exists.'
    """
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: blog_posts.slug' / 'NOT NULL constraint failed: blog_posts.title'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[^\n\[]+)', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols").strip())]
    return None


def _extract_columns_mysql(msg: str) -> list[str] | None:
    # "Duplicate entry 'foo' for key 'blog_posts.ix_blog_posts_slug'"
    m = re.search(r"Duplicate entry .* for key '?([^']+)'?", msg, flags=re.IGNORECASE)
    if m:
        return [m.group(1).split('.')[-1]]
    return None


def _columns_from_constraint_name(constraint_name: str | None, table: str | None) -> list[str] | None:
    # naming convention: uq_<table>_<column> / ix_<table>_<column>
    if not constraint_name or not table:
        return None
    for prefix in (f"uq_{table}_", f"ix_{table}_"):
        if constraint_name.startswith(prefix):
            return [constraint_name[len(prefix):]]
    return None


def extract_columns_from_integrity(exc: IntegrityError, table: str | None = None) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite, MySQL).
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    for extractor in (_extract_columns_postgres, _extract_columns_sqlite, _extract_columns_mysql):
        cols = extractor(msg)
        if cols:
            # MySQL reports the index name rather than the column
            return [(_columns_from_constraint_name(c, table) or [c])[0] for c in cols]

    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, entity: str | None = None, table: str | None = None) -> None:
    """
    Map an IntegrityError onto a typed error and raise it.

    A unique violation means a concurrent writer slipped past the conflict
    check; it is reported as Duplicity so the caller sees the same 409 either way.
    Every other violation is a System failure with the raw text kept internal.
    """
    violation, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc, table) or _columns_from_constraint_name(constraint_name, table)
    label = entity or "Record"
    raw = str(exc.orig) if exc.orig is not None else str(exc)

    if violation is ConstraintViolation.UNIQUE:
        logger.info(
            "mapper.duplicate_detected",
            extra={"entity": label, "fields": columns, "constraint": constraint_name},
        )
        details = {"fields": columns or [], "conflictType": columns[0] if columns else "unique"}
        raise DuplicityError(
            f"{label} already exists",
            details=details,
            internal_message=raw,
        ) from exc

    logger.warning(
        "mapper.integrity_violation",
        extra={"entity": label, "violation": violation.value, "fields": columns, "constraint": constraint_name},
    )
    logger.debug("mapper.integrity_raw", extra={"entity": label, "raw": raw})
    raise SystemFailureError(STORE_FAILURE_MESSAGE, internal_message=raw) from exc


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, entity: str | None = None, table: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, "Blog post", "blog_posts"):
            ... statements that may fail ...

    Rolls back on any failure. Typed errors pass through unchanged,
    IntegrityErrors are mapped, anything else becomes a SystemFailureError.
    """
    try:
        yield
    except PortfolioError:
        await _safe_rollback(db, entity)
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, entity)
        raise_mapped_integrity_error(exc, entity, table)
    except Exception as exc:
        await _safe_rollback(db, entity)
        logger.exception("mapper.unexpected_store_error", extra={"entity": entity})
        raise SystemFailureError(STORE_FAILURE_MESSAGE, internal_message=str(exc)) from exc


async def _safe_rollback(db: AsyncSession, entity: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"entity": entity})
