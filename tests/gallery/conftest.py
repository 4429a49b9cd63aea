"""Shared fixtures for gallery tests: launch manager and HTTP client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.app import app
from vibegallery.gallery.deps import get_db
from vibegallery.gallery.launch.executor import LaunchDispatch, ProcessLauncher
from vibegallery.gallery.managers.launches import LaunchManager
from vibegallery.gallery.models.enums import ShellDialect
from vibegallery.gallery.registry import LaunchRegistry


@pytest.fixture
def launcher() -> AsyncMock:
    """A ``ProcessLauncher`` stand-in that accepts every spawn."""
    mock = AsyncMock(spec=ProcessLauncher)
    mock.launch_cli.return_value = LaunchDispatch(ok=True)
    mock.launch_ide.return_value = LaunchDispatch(ok=True)
    mock.open_folder.return_value = LaunchDispatch(ok=True)
    return mock


@pytest.fixture
def registry() -> LaunchRegistry:
    return LaunchRegistry()


@pytest.fixture
def launch_manager(registry: LaunchRegistry, launcher: AsyncMock) -> LaunchManager:
    return LaunchManager(registry=registry, launcher=launcher, dialect=ShellDialect.CMD)


@pytest.fixture
async def client(db_session: AsyncSession, launch_manager: LaunchManager) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with a test DB session.

    Overrides ``get_db`` so every request uses the ``db_session`` fixture
    from the root conftest.  The app lifespan does NOT run under
    ``ASGITransport``, so state fields are pre-set here.
    """

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    app.state.db_engine = None
    app.state.db_session_factory = None
    app.state.launch_manager = launch_manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.launch_manager = None
