"""
Declarative base, shared columns and identifier generation for all ORM models.
"""

import os
import secrets
import time
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


_PROCESS_TAG = os.urandom(5).hex()
_counter = secrets.randbelow(0xFFFFFF)


def new_object_id() -> str:
    """
    Return a new 24-character lowercase hex identifier.

    Layout: 4-byte big-endian seconds, 5-byte per-process random tag,
    3-byte wrapping counter. Ids sort roughly by creation time.
    """
    global _counter
    _counter = (_counter + 1) % 0x1000000
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{_PROCESS_TAG}{_counter:06x}"


class IdMixin:
    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
    )


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
