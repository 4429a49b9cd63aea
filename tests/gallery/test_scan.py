"""Integration tests for importing projects from a directory."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.managers.projects import list_projects
from vibegallery.gallery.managers.scan import ScanPathNotFoundError, is_project_dir, scan_projects


def _make_tree(root: Path) -> None:
    (root / "web").mkdir()
    (root / "web" / "package.json").write_text("{}")
    (root / "service").mkdir()
    (root / "service" / ".git").mkdir()
    (root / "notes").mkdir()
    (root / "notes" / "todo.txt").write_text("")
    (root / "loose-file.txt").write_text("")


def test_is_project_dir(tmp_path: Path) -> None:
    _make_tree(tmp_path)

    assert is_project_dir(tmp_path / "web")
    assert is_project_dir(tmp_path / "service")
    assert not is_project_dir(tmp_path / "notes")
    assert not is_project_dir(tmp_path / "does-not-exist")


@pytest.mark.integration
async def test_scan_imports_only_new_project_dirs(db_session: AsyncSession, tmp_path: Path) -> None:
    _make_tree(tmp_path)

    created = await scan_projects(db_session, str(tmp_path), group_id="g1")

    assert sorted(p.name for p in created) == ["service", "web"]
    web = next(p for p in created if p.name == "web")
    assert web.path == str(tmp_path / "web")
    assert web.group_id == "g1"
    assert web.description == f"Auto-imported from {tmp_path}"

    # Second pass finds nothing new.
    assert await scan_projects(db_session, str(tmp_path)) == []
    assert len(await list_projects(db_session)) == 2


@pytest.mark.integration
async def test_scan_missing_directory(db_session: AsyncSession, tmp_path: Path) -> None:
    with pytest.raises(ScanPathNotFoundError):
        await scan_projects(db_session, str(tmp_path / "missing"))


@pytest.mark.integration
async def test_scan_endpoint(client: AsyncClient, tmp_path: Path) -> None:
    _make_tree(tmp_path)

    resp = await client.post("/api/projects/scan", json={"scan_path": str(tmp_path)})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Scanned and added 2 projects"
    assert len(resp.json()["projects"]) == 2

    resp = await client.post("/api/projects/scan", json={"scan_path": str(tmp_path / "missing")})
    assert resp.status_code == 422
