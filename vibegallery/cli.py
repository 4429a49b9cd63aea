import click


@click.group()
def main() -> None:
    """VibeGallery - local launcher for coding projects and their AI CLIs."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from VIBE_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Bind port (default: from VIBE_PORT or 5000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the gallery API server."""
    import uvicorn

    from vibegallery.gallery.settings import GallerySettings

    settings = GallerySettings()

    uvicorn.run(
        "vibegallery.gallery.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


@main.command()
def seed() -> None:
    """Insert the default CLI, IDE and env tags into empty tables."""
    import asyncio

    from vibegallery.gallery.log import setup_logging
    from vibegallery.gallery.settings import GallerySettings

    settings = GallerySettings()
    setup_logging(settings.log_level)

    seeded = asyncio.run(_seed(settings))
    if seeded:
        click.echo(f"Seeded: {', '.join(seeded)}")
    else:
        click.echo("Nothing to seed; tag tables already have rows.")


async def _seed(settings) -> list[str]:
    from vibegallery.gallery.db.engine import create_engine, create_session_factory
    from vibegallery.gallery.db.seed import seed_defaults

    engine = create_engine(settings.resolve_database_url())
    try:
        async with create_session_factory(engine)() as db:
            return await seed_defaults(db, settings)
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


def _alembic_config():
    """Alembic Config for the configured database, creating its data dir."""
    from pathlib import Path

    from vibegallery.gallery.db.migrate import alembic_config
    from vibegallery.gallery.settings import GallerySettings

    Path(GallerySettings().data_root).mkdir(parents=True, exist_ok=True)
    return alembic_config()


@main.group()
def db() -> None:
    """Database migration and management commands."""


@db.command()
@click.option("--revision", default="head", help="Target revision (default: head).")
@click.option("--sql", is_flag=True, default=False, help="Print the migration SQL instead of applying it.")
def upgrade(revision: str, sql: bool) -> None:
    """Bring the catalog schema up to *revision*.

    The server does this on startup unless VIBE_AUTO_MIGRATE=false.
    """
    from alembic import command

    command.upgrade(_alembic_config(), revision, sql=sql)
    if not sql:
        click.echo(f"Catalog database upgraded to {revision}.")


@db.command()
@click.option("--revision", default="-1", help="Target revision (default: -1, one step back).")
def downgrade(revision: str) -> None:
    """Roll back database migrations."""
    from alembic import command

    command.downgrade(_alembic_config(), revision)
    click.echo(f"Database downgraded to {revision}.")


@db.command()
@click.argument("message")
def migrate(message: str) -> None:
    """Autogenerate a new migration from model changes."""
    from alembic import command

    command.revision(_alembic_config(), message=message, autogenerate=True)
    click.echo(f"Migration generated: {message}")


@db.command()
def current() -> None:
    """Show current database revision."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)


@db.command()
def history() -> None:
    """Show migration history."""
    from alembic import command

    command.history(_alembic_config(), verbose=True)


if __name__ == "__main__":
    main()
