"""Bulk import of projects from a directory on disk.

Only immediate subdirectories of the scan root are considered.  A
subdirectory counts as a project when it holds any well-known build or
VCS marker.  Directories already registered (same path) are skipped.

Uses ``anyio.to_thread.run_sync`` for the filesystem walk.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from anyio import to_thread
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.db.tables import Project
from vibegallery.gallery.managers.projects import find_project_by_path

PROJECT_MARKERS = (
    "package.json",
    "pom.xml",
    "build.gradle",
    ".git",
    "requirements.txt",
    "setup.py",
    "Cargo.toml",
    "go.mod",
    ".project",
    "CMakeLists.txt",
    "Makefile",
    ".vscode",
    ".idea",
)


class ScanPathNotFoundError(ValueError):
    """Raised when the scan root does not exist or is not a directory."""


def is_project_dir(path: Path) -> bool:
    """True if *path* contains a project marker.  Unreadable dirs are not projects."""
    try:
        names = {entry.name for entry in path.iterdir()}
    except OSError:
        return False
    return any(marker in names for marker in PROJECT_MARKERS)


def _find_project_dirs(root: Path) -> list[Path]:
    if not root.is_dir():
        raise ScanPathNotFoundError(f"Scan path does not exist: {root}")
    try:
        children = sorted(child for child in root.iterdir() if child.is_dir())
    except OSError as exc:
        raise ScanPathNotFoundError(f"Cannot read scan path {root}: {exc}") from exc
    return [child for child in children if is_project_dir(child)]


async def scan_projects(db: AsyncSession, scan_path: str, *, group_id: str | None = None) -> list[Project]:
    """Register every unregistered project directory directly under *scan_path*.

    Returns the newly created projects (possibly empty).
    """
    candidates = await to_thread.run_sync(_find_project_dirs, Path(scan_path))

    created: list[Project] = []
    for candidate in candidates:
        path = str(candidate)
        if await find_project_by_path(db, path) is not None:
            continue
        project = Project(
            id=str(uuid.uuid4()),
            name=candidate.name,
            path=path,
            description=f"Auto-imported from {scan_path}",
            group_id=group_id,
        )
        db.add(project)
        created.append(project)

    if created:
        await db.commit()
        for project in created:
            await db.refresh(project)
    logger.info("Scanned {}: {} candidates, {} imported", scan_path, len(candidates), len(created))
    return created
