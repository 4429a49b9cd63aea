"""CLI tag CRUD endpoints (RPC-style).

Deleting a CLI tag does not touch projects that name it as their default;
launching such a project without an override then answers 409.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from vibegallery.gallery.db.tables import CLITag
from vibegallery.gallery.deps import DbSession
from vibegallery.gallery.managers import cli_tags as cli_tags_mgr
from vibegallery.gallery.models.api import CLITagCreate, CLITagResponse, CLITagUpdate

router = APIRouter(prefix="/cli-tags", tags=["cli-tags"])


@router.post("/create", response_model=CLITagResponse, status_code=status.HTTP_201_CREATED)
async def create_cli_tag(body: CLITagCreate, db: DbSession) -> CLITag:
    return await cli_tags_mgr.create_cli_tag(db, body)


@router.get("/list", response_model=list[CLITagResponse])
async def list_cli_tags(db: DbSession) -> list[CLITag]:
    return await cli_tags_mgr.list_cli_tags(db)


@router.get("/{tag_id}/get", response_model=CLITagResponse)
async def get_cli_tag(tag_id: str, db: DbSession) -> CLITag:
    try:
        return await cli_tags_mgr.get_cli_tag(db, tag_id)
    except cli_tags_mgr.CLITagNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"CLI tag '{tag_id}' not found.") from None


@router.post("/{tag_id}/update", response_model=CLITagResponse)
async def update_cli_tag(tag_id: str, body: CLITagUpdate, db: DbSession) -> CLITag:
    try:
        return await cli_tags_mgr.update_cli_tag(db, tag_id, body)
    except cli_tags_mgr.CLITagNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"CLI tag '{tag_id}' not found.") from None


@router.post("/{tag_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cli_tag(tag_id: str, db: DbSession) -> None:
    try:
        await cli_tags_mgr.delete_cli_tag(db, tag_id)
    except cli_tags_mgr.CLITagNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"CLI tag '{tag_id}' not found.") from None
