"""Project endpoints (RPC-style).

CRUD plus the launch actions: start a CLI session, open in an IDE, import
a directory of projects, reveal a folder in the file manager.  Thin HTTP
adapter -- delegates to the project, scan and launch managers.
"""

from __future__ import annotations

from pathlib import Path

from anyio import to_thread
from fastapi import APIRouter, HTTPException, Query, status

from vibegallery.gallery.db.tables import Project
from vibegallery.gallery.deps import DbSession, LaunchMgr
from vibegallery.gallery.launch.resolver import MissingCLIError, MissingIDEError
from vibegallery.gallery.managers import projects as projects_mgr
from vibegallery.gallery.managers.launches import SpawnFailureError
from vibegallery.gallery.managers.scan import ScanPathNotFoundError, scan_projects
from vibegallery.gallery.models.api import (
    LaunchRequest,
    LaunchResponse,
    MessageResponse,
    OpenFolderRequest,
    OpenIDERequest,
    OpenIDEResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    ScanRequest,
    ScanResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])


def _not_found(project_id: str) -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Project '{project_id}' not found.")


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.post("/create", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(body: ProjectCreate, db: DbSession) -> Project:
    """Create a project.  Group and default tag ids are stored unchecked."""
    return await projects_mgr.create_project(db, body)


@router.get("/list", response_model=list[ProjectResponse])
async def list_projects(
    db: DbSession,
    group_id: str | None = Query(None, description="Only projects of this group."),
) -> list[Project]:
    return await projects_mgr.list_projects(db, group_id=group_id)


@router.get("/{project_id}/get", response_model=ProjectResponse)
async def get_project(project_id: str, db: DbSession) -> Project:
    try:
        return await projects_mgr.get_project(db, project_id)
    except projects_mgr.ProjectNotFoundError:
        raise _not_found(project_id) from None


@router.post("/{project_id}/update", response_model=ProjectResponse)
async def update_project(project_id: str, body: ProjectUpdate, db: DbSession) -> Project:
    try:
        return await projects_mgr.update_project(db, project_id, body)
    except projects_mgr.ProjectNotFoundError:
        raise _not_found(project_id) from None


@router.post("/{project_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, db: DbSession) -> None:
    try:
        await projects_mgr.delete_project(db, project_id)
    except projects_mgr.ProjectNotFoundError:
        raise _not_found(project_id) from None


# ---------------------------------------------------------------------------
# Launch actions
# ---------------------------------------------------------------------------


@router.post("/{project_id}/start", response_model=LaunchResponse)
async def start_project(project_id: str, body: LaunchRequest, db: DbSession, manager: LaunchMgr) -> LaunchResponse:
    """Open a terminal in the project directory and run its CLI tool.

    409 means no CLI tag could be resolved; the client should ask the user
    to pick one and retry with ``cli_tag_id``.
    """
    try:
        session = await manager.start_project(
            db,
            project_id,
            cli_tag_id=body.cli_tag_id,
            env_tag_id=body.env_tag_id,
        )
    except projects_mgr.ProjectNotFoundError:
        raise _not_found(project_id) from None
    except MissingCLIError as exc:
        raise HTTPException(status.HTTP_409_CONFLICT, detail=str(exc)) from None
    except SpawnFailureError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from None

    return LaunchResponse(
        session_id=session.session_id,
        project_id=session.project_id,
        message=f"Project launched with {session.cli_tag_name}",
    )


@router.post("/{project_id}/open-ide", response_model=OpenIDEResponse)
async def open_in_ide(project_id: str, body: OpenIDERequest, db: DbSession, manager: LaunchMgr) -> OpenIDEResponse:
    try:
        launch = await manager.open_in_ide(db, project_id, ide_tag_id=body.ide_tag_id)
    except projects_mgr.ProjectNotFoundError:
        raise _not_found(project_id) from None
    except MissingIDEError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except SpawnFailureError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from None

    return OpenIDEResponse(
        project_id=launch.project_id,
        ide_tag=launch.ide_tag_name,
        message=f"Opening project in {launch.ide_tag_name}",
    )


@router.post("/scan", response_model=ScanResponse)
async def scan_directory(body: ScanRequest, db: DbSession) -> ScanResponse:
    """Import every unregistered project directory directly under ``scan_path``."""
    try:
        created = await scan_projects(db, body.scan_path, group_id=body.group_id)
    except ScanPathNotFoundError as exc:
        raise HTTPException(422, detail=str(exc)) from None

    return ScanResponse(
        message=f"Scanned and added {len(created)} projects",
        projects=[ProjectResponse.model_validate(p) for p in created],
    )


@router.post("/open-folder", response_model=MessageResponse)
async def open_folder(body: OpenFolderRequest, manager: LaunchMgr) -> MessageResponse:
    if not await to_thread.run_sync(Path(body.path).is_dir):
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Folder '{body.path}' not found.")
    try:
        await manager.open_folder(body.path)
    except SpawnFailureError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from None
    return MessageResponse(message="Folder opened")
