"""Environment tag CRUD endpoints (RPC-style).

An env tag is read and written together with its ``configurations``:
create takes the initial list, update replaces the list when one is sent,
delete removes the tag and every configuration it owns.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from vibegallery.gallery.db.tables import EnvConfiguration, EnvTag
from vibegallery.gallery.deps import DbSession
from vibegallery.gallery.managers import env_tags as env_tags_mgr
from vibegallery.gallery.models.api import EnvConfigurationResponse, EnvTagCreate, EnvTagResponse, EnvTagUpdate

router = APIRouter(prefix="/env-tags", tags=["env-tags"])


def _not_found(tag_id: str) -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Env tag '{tag_id}' not found.")


@router.post("/create", response_model=EnvTagResponse, status_code=status.HTTP_201_CREATED)
async def create_env_tag(body: EnvTagCreate, db: DbSession) -> EnvTag:
    return await env_tags_mgr.create_env_tag(db, body)


@router.get("/list", response_model=list[EnvTagResponse])
async def list_env_tags(db: DbSession) -> list[EnvTag]:
    return await env_tags_mgr.list_env_tags(db)


@router.get("/{tag_id}/get", response_model=EnvTagResponse)
async def get_env_tag(tag_id: str, db: DbSession) -> EnvTag:
    try:
        return await env_tags_mgr.get_env_tag(db, tag_id)
    except env_tags_mgr.EnvTagNotFoundError:
        raise _not_found(tag_id) from None


@router.get("/{tag_id}/configurations", response_model=list[EnvConfigurationResponse])
async def list_env_configurations(tag_id: str, db: DbSession) -> list[EnvConfiguration]:
    """Configurations of one tag in launch order."""
    try:
        await env_tags_mgr.get_env_tag(db, tag_id)
    except env_tags_mgr.EnvTagNotFoundError:
        raise _not_found(tag_id) from None
    return await env_tags_mgr.list_env_configurations(db, tag_id)


@router.post("/{tag_id}/update", response_model=EnvTagResponse)
async def update_env_tag(tag_id: str, body: EnvTagUpdate, db: DbSession) -> EnvTag:
    try:
        return await env_tags_mgr.update_env_tag(db, tag_id, body)
    except env_tags_mgr.EnvTagNotFoundError:
        raise _not_found(tag_id) from None


@router.post("/{tag_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_env_tag(tag_id: str, db: DbSession) -> None:
    try:
        await env_tags_mgr.delete_env_tag(db, tag_id)
    except env_tags_mgr.EnvTagNotFoundError:
        raise _not_found(tag_id) from None
