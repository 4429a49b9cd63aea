"""Project group CRUD endpoints (RPC-style).

All write operations use POST; reads use GET.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from vibegallery.gallery.db.tables import ProjectGroup
from vibegallery.gallery.deps import DbSession
from vibegallery.gallery.managers import groups as groups_mgr
from vibegallery.gallery.models.api import GroupCreate, GroupResponse, GroupUpdate

router = APIRouter(prefix="/groups", tags=["groups"])


def _not_found(group_id: str) -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Group '{group_id}' not found.")


@router.post("/create", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(body: GroupCreate, db: DbSession) -> ProjectGroup:
    return await groups_mgr.create_group(db, body)


@router.get("/list", response_model=list[GroupResponse])
async def list_groups(db: DbSession) -> list[ProjectGroup]:
    """List all groups, newest first."""
    return await groups_mgr.list_groups(db)


@router.get("/{group_id}/get", response_model=GroupResponse)
async def get_group(group_id: str, db: DbSession) -> ProjectGroup:
    try:
        return await groups_mgr.get_group(db, group_id)
    except groups_mgr.GroupNotFoundError:
        raise _not_found(group_id) from None


@router.post("/{group_id}/update", response_model=GroupResponse)
async def update_group(group_id: str, body: GroupUpdate, db: DbSession) -> ProjectGroup:
    try:
        return await groups_mgr.update_group(db, group_id, body)
    except groups_mgr.GroupNotFoundError:
        raise _not_found(group_id) from None


@router.post("/{group_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(group_id: str, db: DbSession) -> None:
    """Delete a group.  Its projects are kept and keep the stale ``group_id``."""
    try:
        await groups_mgr.delete_group(db, group_id)
    except groups_mgr.GroupNotFoundError:
        raise _not_found(group_id) from None
