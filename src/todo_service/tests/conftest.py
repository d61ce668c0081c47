"""
Core pytest configuration for the entire test suite.

Only the shared database setup lives here. Domain fixtures (repositories, API
clients) are in `tests/test_fixtures/` and imported at the bottom of this module
so they are available everywhere.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block before importing todo_service.* so collection stays quiet.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Path patching
# -------------------------------
# Ensure 'src' is on sys.path so `import todo_service...` works without an install.
SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from todo_service.config.settings import Settings
from todo_service.core.logging.builder import setup_logging
from todo_service.database.session import create_session_maker, create_schema, drop_schema

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the whole session, with plain text on stderr.
    caplog attaches its own handler per test, so it keeps working after dictConfig.
    """
    setup_logging(Settings(LOG_FORMAT="text", LOG_LEVEL="DEBUG", LOG_TO_STDOUT=True, ENV="testing"))
    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """Drop credentials from a database URL before logging it."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(tmp_path: Path) -> str:
    """
    1. `TEST_DATABASE_URL` (CI override, e.g. a throwaway Postgres database)
    2. otherwise a fresh SQLite file inside the test's tmp_path
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return f"sqlite+aiosqlite:///{tmp_path / 'test_database.db'}"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test: repositories commit for real, so isolation comes from
    recreating the tables rather than from rolling back a shared transaction.
    Identity columns therefore restart at 1 in every test.
    """
    url = get_test_database_url(tmp_path)
    logger.debug(f"Using test DB: {safe_log_db_url(url)}")
    engine = create_async_engine(url, echo=False, pool_pre_ping=True)

    await drop_schema(engine)
    await create_schema(engine)

    yield engine

    await drop_schema(engine)
    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(async_engine)


# Repository and API fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402, F401
    backend,
    todo_repository,
    label_repository,
    memory_todo_repository,
    memory_label_repository,
    db_todo_repository,
    db_label_repository,
    create_label,
)
from .test_fixtures.api_fixtures import app, client  # noqa: E402, F401
