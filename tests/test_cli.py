"""Tests for the ``vibegallery`` command line."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from loguru import logger

from vibegallery.cli import main


@pytest.fixture
def runner() -> Iterator[CliRunner]:
    yield CliRunner()
    # ``seed`` installs a stderr sink bound to the runner's captured stream.
    logger.remove()


def test_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    for name in ("serve", "seed", "db"):
        assert name in result.output


@pytest.mark.integration
def test_upgrade_then_seed(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(main, ["db", "upgrade"])
    assert result.exit_code == 0, result.output
    assert "upgraded to head" in result.output
    assert (tmp_path / "data" / "gallery.db").is_file()

    result = runner.invoke(main, ["seed"])
    assert result.exit_code == 0, result.output
    assert "cli_tags" in result.output

    result = runner.invoke(main, ["seed"])
    assert result.exit_code == 0, result.output
    assert "Nothing to seed" in result.output


@pytest.mark.integration
def test_upgrade_sql_mode_prints_ddl(runner: CliRunner) -> None:
    result = runner.invoke(main, ["db", "upgrade", "--sql"])
    assert result.exit_code == 0, result.output
    assert "CREATE TABLE project_groups" in result.output
