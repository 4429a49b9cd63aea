"""Default catalog rows for a fresh database.

Each table is seeded only while it is empty, so user edits and deletions
survive restarts.  Projects and groups are never seeded.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from loguru import logger
from sqlalchemy import func, select

from vibegallery.gallery.db.tables import Base, CLITag, EnvConfiguration, EnvTag, IDETag

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vibegallery.gallery.settings import GallerySettings

DEFAULT_CLI_TAGS = [
    {"name": "Claude Code", "command": "claude", "description": "Official Claude CLI", "color": "#667eea"},
    {"name": "Windsurf", "command": "windsurf", "description": "Windsurf CLI", "color": "#00b4d8"},
    {"name": "Cursor", "command": "cursor", "description": "Cursor IDE", "color": "#1e90ff"},
    {"name": "VS Code", "command": "code", "description": "Visual Studio Code", "color": "#007acc"},
]

DEFAULT_IDE_TAGS = [
    {"name": "VS Code", "executable_path": "code", "description": "Visual Studio Code", "color": "#007acc"},
    {"name": "Cursor", "executable_path": "cursor", "description": "Cursor IDE", "color": "#1e90ff"},
    {"name": "Windsurf", "executable_path": "windsurf", "description": "Windsurf IDE", "color": "#00b4d8"},
    {"name": "WebStorm", "executable_path": "webstorm", "description": "JetBrains WebStorm", "color": "#0fa7bf"},
]

DEFAULT_ENV_TAG = {"name": "Default Claude", "description": "Default Claude environment", "color": "#764ba2"}


async def _is_empty(db: AsyncSession, table: type[Base]) -> bool:
    count = await db.scalar(select(func.count()).select_from(table))
    return not count


def _default_env_variables(settings: GallerySettings) -> list[tuple[str, str]]:
    return [
        ("ANTHROPIC_BASE_URL", settings.default_anthropic_base_url),
        ("ANTHROPIC_AUTH_TOKEN", settings.default_anthropic_auth_token.get_secret_value()),
        ("CLAUDE_CODE_GIT_BASH_PATH", settings.default_claude_code_git_bash_path),
    ]


async def seed_defaults(db: AsyncSession, settings: GallerySettings) -> list[str]:
    """Insert default tags into empty tag tables.

    Returns the names of the tables that were seeded.
    """
    seeded: list[str] = []

    if await _is_empty(db, CLITag):
        db.add_all(CLITag(id=str(uuid.uuid4()), **row) for row in DEFAULT_CLI_TAGS)
        seeded.append(CLITag.__tablename__)

    if await _is_empty(db, IDETag):
        db.add_all(IDETag(id=str(uuid.uuid4()), command_args=".", **row) for row in DEFAULT_IDE_TAGS)
        seeded.append(IDETag.__tablename__)

    if await _is_empty(db, EnvTag):
        tag_id = str(uuid.uuid4())
        tag = EnvTag(id=tag_id, **DEFAULT_ENV_TAG)
        tag.configurations = [
            EnvConfiguration(id=str(uuid.uuid4()), tag_id=tag_id, key=key, value=value, position=index)
            for index, (key, value) in enumerate(_default_env_variables(settings))
        ]
        db.add(tag)
        seeded.append(EnvTag.__tablename__)

    if seeded:
        await db.commit()
        logger.info("Seeded default catalog: {}", ", ".join(seeded))
    return seeded
