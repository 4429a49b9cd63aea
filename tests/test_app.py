"""Smoke tests for the application wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from loguru import logger

from vibegallery.gallery.app import app
from vibegallery.gallery.managers.launches import LaunchManager


async def test_health() -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_launch_endpoints_unavailable_without_manager() -> None:
    app.state.launch_manager = None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/sessions/list")
    assert resp.status_code == 503


@pytest.mark.integration
async def test_lifespan_migrates_seeds_and_wires_launcher(tmp_path: Path) -> None:
    data_root = tmp_path / "data"  # VIBE_DATA_ROOT from the root conftest

    try:
        async with app.router.lifespan_context(app):
            assert (data_root / "gallery.db").is_file()
            assert isinstance(app.state.launch_manager, LaunchManager)

            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                resp = await client.get("/api/cli-tags/list")
            assert {tag["name"] for tag in resp.json()} == {"Claude Code", "Windsurf", "Cursor", "VS Code"}
    finally:
        logger.remove()
        app.state.launch_manager = None
        app.state.db_session_factory = None
