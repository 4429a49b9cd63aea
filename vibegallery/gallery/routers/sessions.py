"""Launch session endpoints (RPC-style).

Sessions live only in the in-process registry.  Stopping one removes it
from the registry; the terminal window it was launched in keeps running.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from vibegallery.gallery.deps import LaunchMgr
from vibegallery.gallery.managers.launches import LaunchSessionNotFoundError
from vibegallery.gallery.models.api import SessionResponse, StopSessionResponse
from vibegallery.gallery.models.session import LaunchSession

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/list", response_model=list[SessionResponse])
async def list_sessions(
    manager: LaunchMgr,
    project_id: str | None = Query(None, description="Only sessions of this project."),
) -> list[LaunchSession]:
    return manager.list_sessions(project_id)


@router.get("/{session_id}/get", response_model=SessionResponse)
async def get_session(session_id: str, manager: LaunchMgr) -> LaunchSession:
    try:
        return manager.get_session(session_id)
    except LaunchSessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Session '{session_id}' not found.") from None


@router.post("/{session_id}/stop", response_model=StopSessionResponse)
async def stop_session(session_id: str, manager: LaunchMgr) -> StopSessionResponse:
    try:
        manager.stop_session(session_id)
    except LaunchSessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Session '{session_id}' not found.") from None
    return StopSessionResponse(
        session_id=session_id,
        message="Session removed. Close the terminal window manually to end the CLI process.",
    )
