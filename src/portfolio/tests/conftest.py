"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
that are needed across ALL types of tests (repositories, services, APIs, etc.).

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/service_fixtures.py
- tests/test_fixtures/api_fixtures.py
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block at the very top, before importing portfolio.* modules or any test
# fixtures that may import heavy libraries, so collection stays quiet.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# Settings are cached on first use; pin the test values before anything reads them.
# A low hash cost keeps the admin tests fast without changing the algorithm.
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_TO_STDOUT", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from portfolio.config import get_settings
from portfolio.core.logging.builder import setup_logging
from portfolio.database.base import Base
import portfolio.models  # noqa: F401  registers every table on Base.metadata

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the application's dictConfig logging once for the whole session.

    pytest's caplog handler is attached per test, after this runs, so
    `caplog.records` keeps working.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """Return `db_url` without credentials, for logging."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    `TEST_DATABASE_URL` when set (CI against Postgres), otherwise a private
    in-memory SQLite database per test.
    """
    return os.getenv("TEST_DATABASE_URL") or "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test.

    The services commit, so isolation comes from recreating the tables rather
    than from rolling back an outer transaction. For in-memory SQLite the
    StaticPool keeps every session on the one connection that owns the data.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


# Domain fixtures, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    blog_repo,
    create_blog_row,
)
from .test_fixtures.service_fixtures import (  # noqa: E402,F401
    fake,
    blog_payload,
    project_payload,
    skill_payload,
    experience_payload,
    education_payload,
    admin_payload,
    blog_service,
    admin_service,
    created_admin,
)
from .test_fixtures.api_fixtures import (  # noqa: E402,F401
    app,
    client,
    admin_token,
    auth_headers,
)
