"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from vibegallery.gallery.settings import GallerySettings, get_settings


def test_database_url_defaults_to_sqlite_under_data_root(tmp_path: Path) -> None:
    settings = get_settings()

    expected = (tmp_path / "data").resolve() / "gallery.db"
    assert settings.resolve_database_url() == f"sqlite+aiosqlite:///{expected.as_posix()}"


def test_explicit_database_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIBE_DATABASE_URL", "sqlite+aiosqlite:///elsewhere.db")
    assert GallerySettings().resolve_database_url() == "sqlite+aiosqlite:///elsewhere.db"


def test_launch_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIBE_SHELL_DIALECT", "posix")
    monkeypatch.setenv("VIBE_TERMINAL", '["gnome-terminal", "--", "sh", "-c", "{command}"]')
    monkeypatch.setenv("VIBE_DEFAULT_ANTHROPIC_AUTH_TOKEN", "sk-secret")

    settings = GallerySettings()

    assert settings.shell_dialect == "posix"
    assert settings.terminal == ["gnome-terminal", "--", "sh", "-c", "{command}"]
    assert settings.default_anthropic_auth_token.get_secret_value() == "sk-secret"
    assert "sk-secret" not in repr(settings)


def test_invalid_dialect_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIBE_SHELL_DIALECT", "fish")
    with pytest.raises(ValueError):
        GallerySettings()
