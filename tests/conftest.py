"""Shared test fixtures: a throwaway SQLite catalog per test.

Each test function gets its own database file under ``tmp_path`` with the
schema created from ``Base.metadata``, so tests never share rows.  The
Alembic migration chain itself is covered by ``test_db_integration.py``.

Tests touching the database should be marked with ``@pytest.mark.integration``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from vibegallery.gallery.db.engine import create_engine, create_session_factory
from vibegallery.gallery.db.tables import Base
from vibegallery.gallery.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point settings at ``tmp_path`` and drop the cached instance around each test."""
    monkeypatch.setenv("VIBE_DATA_ROOT", str(tmp_path / "data"))
    monkeypatch.delenv("VIBE_DATABASE_URL", raising=False)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{(tmp_path / 'catalog.db').as_posix()}"


@pytest.fixture
async def async_engine(database_url: str) -> AsyncIterator[AsyncEngine]:
    """Engine with the full schema created from the ORM metadata."""
    engine = create_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with create_session_factory(async_engine)() as session:
        yield session


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Collect loguru records emitted during the test."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
