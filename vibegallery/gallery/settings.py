"""Service configuration loaded from VIBE_* environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GallerySettings(BaseSettings):
    """VibeGallery settings.

    All fields are read from environment variables with the ``VIBE_`` prefix.
    For example, ``VIBE_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="VIBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Storage ---------------------------------------------------------------
    data_root: str = "./data"
    """Directory holding the SQLite catalog (``gallery.db``)."""

    database_url: str | None = None
    """SQLAlchemy async URL.  Defaults to ``sqlite+aiosqlite`` under ``data_root``."""

    auto_migrate: bool = True
    """Apply Alembic migrations on startup (desktop installs have no ops step)."""

    # -- Server ----------------------------------------------------------------
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    ui_dir: str = "frontend/build"
    """Built web UI served at / when the directory exists."""

    # -- Launching -------------------------------------------------------------
    shell_dialect: Literal["auto", "cmd", "posix"] = "auto"
    """Shell syntax used to render launch commands.  ``auto`` follows the host OS."""

    terminal: list[str] | None = None
    """Terminal argv template for POSIX hosts, with a ``{command}`` placeholder.

    Example: ``VIBE_TERMINAL='["gnome-terminal", "--", "sh", "-c", "{command}"]'``.
    Unset means the platform default (``x-terminal-emulator`` / Terminal.app).
    """

    ide_probe_timeout: float = 5.0
    """Seconds to watch an IDE spawn for early failure output."""

    # -- Seed catalog ----------------------------------------------------------
    default_anthropic_base_url: str = "https://api.anthropic.com"
    default_anthropic_auth_token: SecretStr = SecretStr("")
    default_claude_code_git_bash_path: str = r"C:\Program Files\Git\bin\bash.exe"

    # -- Helpers ---------------------------------------------------------------

    def resolve_database_url(self) -> str:
        """Return the configured URL or the SQLite file under ``data_root``."""
        if self.database_url:
            return self.database_url
        db_path = Path(self.data_root).resolve() / "gallery.db"
        return f"sqlite+aiosqlite:///{db_path.as_posix()}"


def get_settings() -> GallerySettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> GallerySettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return GallerySettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
