"""Alembic entry points shared by the CLI and the app lifespan."""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

ALEMBIC_INI = Path(__file__).parent.parent / "alembic.ini"


def alembic_config(database_url: str | None = None, *, configure_logger: bool = True) -> Config:
    """Build an Alembic Config from the packaged ``alembic.ini``.

    Both alembic.ini and the alembic/ directory live inside the package, so
    this works from source and from an installed wheel.  ``database_url``
    overrides the settings-derived URL (tests, ad-hoc targets).
    """
    cfg = Config(str(ALEMBIC_INI))
    cfg.attributes["configure_logger"] = configure_logger
    if database_url is not None:
        cfg.attributes["database_url"] = database_url
    return cfg


def upgrade_database(database_url: str, revision: str = "head") -> None:
    """Apply migrations up to *revision*.  Blocking; run off the event loop."""
    command.upgrade(alembic_config(database_url, configure_logger=False), revision)
