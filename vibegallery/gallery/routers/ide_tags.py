"""IDE tag CRUD endpoints (RPC-style)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from vibegallery.gallery.db.tables import IDETag
from vibegallery.gallery.deps import DbSession
from vibegallery.gallery.managers import ide_tags as ide_tags_mgr
from vibegallery.gallery.models.api import IDETagCreate, IDETagResponse, IDETagUpdate

router = APIRouter(prefix="/ide-tags", tags=["ide-tags"])


@router.post("/create", response_model=IDETagResponse, status_code=status.HTTP_201_CREATED)
async def create_ide_tag(body: IDETagCreate, db: DbSession) -> IDETag:
    return await ide_tags_mgr.create_ide_tag(db, body)


@router.get("/list", response_model=list[IDETagResponse])
async def list_ide_tags(db: DbSession) -> list[IDETag]:
    return await ide_tags_mgr.list_ide_tags(db)


@router.get("/{tag_id}/get", response_model=IDETagResponse)
async def get_ide_tag(tag_id: str, db: DbSession) -> IDETag:
    try:
        return await ide_tags_mgr.get_ide_tag(db, tag_id)
    except ide_tags_mgr.IDETagNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"IDE tag '{tag_id}' not found.") from None


@router.post("/{tag_id}/update", response_model=IDETagResponse)
async def update_ide_tag(tag_id: str, body: IDETagUpdate, db: DbSession) -> IDETag:
    try:
        return await ide_tags_mgr.update_ide_tag(db, tag_id, body)
    except ide_tags_mgr.IDETagNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"IDE tag '{tag_id}' not found.") from None


@router.post("/{tag_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ide_tag(tag_id: str, db: DbSession) -> None:
    try:
        await ide_tags_mgr.delete_ide_tag(db, tag_id)
    except ide_tags_mgr.IDETagNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"IDE tag '{tag_id}' not found.") from None
