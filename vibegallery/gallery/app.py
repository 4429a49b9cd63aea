from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from anyio import to_thread
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.routing import APIRouter
from fastapi.staticfiles import StaticFiles
from loguru import logger

from vibegallery.gallery.db.engine import create_engine, create_session_factory
from vibegallery.gallery.db.migrate import upgrade_database
from vibegallery.gallery.db.seed import seed_defaults
from vibegallery.gallery.launch.executor import ProcessLauncher
from vibegallery.gallery.launch.renderer import default_dialect
from vibegallery.gallery.log import setup_logging
from vibegallery.gallery.managers.launches import LaunchManager
from vibegallery.gallery.registry import LaunchRegistry
from vibegallery.gallery.settings import get_settings

# Seconds to let launch watchers log their last exit codes on shutdown.
WATCHER_DRAIN_TIMEOUT = 2.0


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    data_root = Path(settings.data_root)
    data_root.mkdir(parents=True, exist_ok=True)
    setup_logging(settings.log_level, log_dir=data_root / "logs")

    logger.info("VibeGallery starting (host={}, port={})", settings.host, settings.port)
    logger.info("Data root: {}", data_root.resolve())

    # -- Database --------------------------------------------------------------
    database_url = settings.resolve_database_url()
    if settings.auto_migrate:
        await to_thread.run_sync(upgrade_database, database_url)
        logger.info("Database: migrations applied")

    engine = create_engine(database_url)
    _app.state.db_engine = engine
    _app.state.db_session_factory = create_session_factory(engine)

    async with _app.state.db_session_factory() as db:
        await seed_defaults(db, settings)

    # -- Launching -------------------------------------------------------------
    dialect = default_dialect(settings.shell_dialect)
    launcher = ProcessLauncher(
        dialect=dialect,
        terminal=settings.terminal,
        ide_probe_timeout=settings.ide_probe_timeout,
    )
    _app.state.launch_manager = LaunchManager(registry=LaunchRegistry(), launcher=launcher, dialect=dialect)
    logger.info("LaunchManager: initialised (dialect={})", dialect)

    yield

    # -- Shutdown --------------------------------------------------------------
    manager: LaunchManager = _app.state.launch_manager
    logger.info("VibeGallery shutting down (recorded_sessions={})", manager.registry.active_count)

    # Terminals and IDEs are detached and keep running; only watchers stop.
    if not await launcher.drain(timeout=WATCHER_DRAIN_TIMEOUT):
        logger.debug("Launch watchers cancelled on shutdown")

    await engine.dispose()
    logger.info("Database: disposed")


app = FastAPI(title="VibeGallery", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# API router -- all backend endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from vibegallery.gallery.routers.cli_tags import router as cli_tags_router  # noqa: E402
from vibegallery.gallery.routers.env_tags import router as env_tags_router  # noqa: E402
from vibegallery.gallery.routers.groups import router as groups_router  # noqa: E402
from vibegallery.gallery.routers.ide_tags import router as ide_tags_router  # noqa: E402
from vibegallery.gallery.routers.projects import router as projects_router  # noqa: E402
from vibegallery.gallery.routers.sessions import router as sessions_router  # noqa: E402

api.include_router(groups_router)
api.include_router(projects_router)
api.include_router(cli_tags_router)
api.include_router(env_tags_router)
api.include_router(ide_tags_router)
api.include_router(sessions_router)

app.include_router(api)

# ---------------------------------------------------------------------------
# Static UI serving
# Resolved relative to CWD; override with VIBE_UI_DIR.
# ---------------------------------------------------------------------------
_UI_DIR = Path(get_settings().ui_dir)

if _UI_DIR.is_dir():
    if (_UI_DIR / "static").is_dir():
        app.mount("/static", StaticFiles(directory=_UI_DIR / "static"), name="ui-static")

    @app.get("/{full_path:path}")
    async def serve_spa(full_path: str) -> FileResponse:
        """Serve index.html for every unmatched route (client-side routing)."""
        file_path = (_UI_DIR / full_path).resolve()
        if file_path.is_file() and file_path.is_relative_to(_UI_DIR.resolve()):
            return FileResponse(file_path)
        return FileResponse(_UI_DIR / "index.html")
