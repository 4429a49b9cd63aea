"""Integration tests for the default catalog seed."""

from __future__ import annotations

import pytest
from pydantic import SecretStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vibegallery.gallery.db.seed import seed_defaults
from vibegallery.gallery.db.tables import CLITag, IDETag
from vibegallery.gallery.managers import cli_tags, env_tags
from vibegallery.gallery.models.api import CLITagCreate
from vibegallery.gallery.settings import GallerySettings

pytestmark = pytest.mark.integration


async def test_seed_empty_catalog(db_session: AsyncSession) -> None:
    settings = GallerySettings(default_anthropic_auth_token=SecretStr("sk-test"))

    seeded = await seed_defaults(db_session, settings)

    assert seeded == ["cli_tags", "ide_tags", "env_tags"]
    cli_names = sorted((await db_session.scalars(select(CLITag.name))).all())
    assert cli_names == ["Claude Code", "Cursor", "VS Code", "Windsurf"]

    ide_rows = (await db_session.scalars(select(IDETag))).all()
    assert {row.executable_path for row in ide_rows} == {"code", "cursor", "windsurf", "webstorm"}
    assert {row.command_args for row in ide_rows} == {"."}

    (env,) = await env_tags.list_env_tags(db_session)
    assert env.name == "Default Claude"
    assert [(c.key, c.value) for c in env.configurations] == [
        ("ANTHROPIC_BASE_URL", "https://api.anthropic.com"),
        ("ANTHROPIC_AUTH_TOKEN", "sk-test"),
        ("CLAUDE_CODE_GIT_BASH_PATH", "C:\\Program Files\\Git\\bin\\bash.exe"),
    ]


async def test_seed_skips_tables_with_rows(db_session: AsyncSession) -> None:
    await cli_tags.create_cli_tag(db_session, CLITagCreate(name="Mine", command="mine"))

    seeded = await seed_defaults(db_session, GallerySettings())

    assert "cli_tags" not in seeded
    assert [t.name for t in await cli_tags.list_cli_tags(db_session)] == ["Mine"]


async def test_seed_is_idempotent(db_session: AsyncSession) -> None:
    await seed_defaults(db_session, GallerySettings())
    assert await seed_defaults(db_session, GallerySettings()) == []
