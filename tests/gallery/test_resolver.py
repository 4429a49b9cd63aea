"""Tests for launch tag resolution against a real catalog database."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.launch.resolver import MissingCLIError, MissingIDEError, resolve_ide, resolve_launch
from vibegallery.gallery.managers import cli_tags, env_tags, ide_tags, projects
from vibegallery.gallery.models.api import (
    CLITagCreate,
    EnvConfigurationInput,
    EnvTagCreate,
    IDETagCreate,
    ProjectCreate,
)
from vibegallery.gallery.models.catalog import ProjectInfo

pytestmark = pytest.mark.integration


async def _project(db: AsyncSession, **fields: str | None) -> ProjectInfo:
    row = await projects.create_project(db, ProjectCreate(name="Demo", path="/tmp/demo", **fields))
    return ProjectInfo.model_validate(row)


async def test_default_cli_tag_is_used(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    project = await _project(db_session, default_cli_tag=claude.id)

    resolved = await resolve_launch(db_session, project)

    assert resolved.cli.id == claude.id
    assert resolved.cli.command == "claude"
    assert resolved.env_tag is None
    assert resolved.env_variables == []
    assert not resolved.env_tag_applied


async def test_override_wins_over_default(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    cursor = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Cursor", command="cursor"))
    project = await _project(db_session, default_cli_tag=claude.id)

    resolved = await resolve_launch(db_session, project, cli_tag_id=cursor.id)

    assert resolved.cli.name == "Cursor"


async def test_empty_override_falls_back_to_default(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    project = await _project(db_session, default_cli_tag=claude.id)

    resolved = await resolve_launch(db_session, project, cli_tag_id="", env_tag_id="")

    assert resolved.cli.id == claude.id


async def test_no_cli_tag_anywhere_raises(db_session: AsyncSession) -> None:
    project = await _project(db_session)

    with pytest.raises(MissingCLIError) as exc_info:
        await resolve_launch(db_session, project)

    assert exc_info.value.project_id == project.id
    assert exc_info.value.tag_id is None


async def test_deleted_default_cli_tag_raises(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    project = await _project(db_session, default_cli_tag=claude.id)
    await cli_tags.delete_cli_tag(db_session, claude.id)

    with pytest.raises(MissingCLIError) as exc_info:
        await resolve_launch(db_session, project)

    assert exc_info.value.tag_id == claude.id


async def test_unknown_override_does_not_fall_back(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    project = await _project(db_session, default_cli_tag=claude.id)

    with pytest.raises(MissingCLIError):
        await resolve_launch(db_session, project, cli_tag_id="no-such-tag")


async def test_env_variables_in_store_order(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    env = await env_tags.create_env_tag(
        db_session,
        EnvTagCreate(
            name="Default Claude",
            configurations=[
                EnvConfigurationInput(key="ZED", value="z"),
                EnvConfigurationInput(key="ALPHA", value="a"),
                EnvConfigurationInput(key="EMPTY", value=""),
            ],
        ),
    )
    project = await _project(db_session, default_cli_tag=claude.id, default_env_tag=env.id)

    resolved = await resolve_launch(db_session, project)

    assert resolved.env_tag_applied
    assert resolved.env_tag is not None
    assert resolved.env_tag.name == "Default Claude"
    assert [(v.key, v.value) for v in resolved.env_variables] == [("ZED", "z"), ("ALPHA", "a"), ("EMPTY", "")]


async def test_dangling_env_tag_resolves_to_nothing(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    project = await _project(db_session, default_cli_tag=claude.id, default_env_tag="deleted-env")

    resolved = await resolve_launch(db_session, project)

    assert resolved.env_tag is None
    assert resolved.env_variables == []


async def test_resolve_launch_is_idempotent(db_session: AsyncSession) -> None:
    claude = await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Claude Code", command="claude"))
    env = await env_tags.create_env_tag(
        db_session,
        EnvTagCreate(name="E", configurations=[EnvConfigurationInput(key="A", value="1")]),
    )
    project = await _project(db_session, default_cli_tag=claude.id, default_env_tag=env.id)

    first = await resolve_launch(db_session, project)
    second = await resolve_launch(db_session, project)

    assert first == second


async def test_resolve_ide_default_and_override(db_session: AsyncSession) -> None:
    code = await ide_tags.create_ide_tag(db_session, IDETagCreate(name="VS Code", executable_path="code"))
    storm = await ide_tags.create_ide_tag(db_session, IDETagCreate(name="WebStorm", executable_path="webstorm"))
    project = await _project(db_session, default_ide_tag=code.id)

    assert (await resolve_ide(db_session, project)).name == "VS Code"
    assert (await resolve_ide(db_session, project, ide_tag_id=storm.id)).name == "WebStorm"


async def test_resolve_ide_missing(db_session: AsyncSession) -> None:
    project = await _project(db_session)
    with pytest.raises(MissingIDEError):
        await resolve_ide(db_session, project)

    dangling = await _project(db_session, default_ide_tag="gone")
    with pytest.raises(MissingIDEError) as exc_info:
        await resolve_ide(db_session, dangling)
    assert exc_info.value.tag_id == "gone"
