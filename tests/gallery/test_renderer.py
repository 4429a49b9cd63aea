"""Tests for launch command rendering (no database, no processes)."""

from __future__ import annotations

import pytest

from vibegallery.gallery.launch.renderer import (
    CommandChain,
    build_launch_chain,
    default_dialect,
    quote,
    render_ide_command,
    render_launch_command,
)
from vibegallery.gallery.models.catalog import CLITagInfo, EnvVariable, IDETagInfo, ProjectInfo
from vibegallery.gallery.models.enums import ShellDialect

DEMO = ProjectInfo(id="p1", name="Demo", path="C:\\proj\\demo")
CLAUDE = CLITagInfo(id="c1", name="Claude Code", command="claude")


def test_demo_project_statements_cmd() -> None:
    chain = build_launch_chain(DEMO, CLAUDE, [], ShellDialect.CMD)

    assert chain.statements == [
        "title Demo - Claude Code",
        'cd /d "C:\\proj\\demo"',
        "claude",
    ]
    assert chain.render() == 'title Demo - Claude Code && cd /d "C:\\proj\\demo" && claude'


def test_demo_project_statements_posix() -> None:
    project = ProjectInfo(id="p1", name="Demo", path="/home/me/demo")
    chain = build_launch_chain(project, CLAUDE, [], ShellDialect.POSIX)

    assert chain.statements == [
        "printf '\\033]0;%s\\007' \"Demo - Claude Code\"",
        'cd "/home/me/demo"',
        "claude",
    ]


def test_blank_env_values_are_skipped() -> None:
    variables = [
        EnvVariable(key="A", value="1"),
        EnvVariable(key="B", value=""),
        EnvVariable(key="C", value="   "),
        EnvVariable(key="D", value=None),
    ]
    command = render_launch_command(DEMO, CLAUDE, variables, ShellDialect.CMD)

    assert 'set "A=1"' in command
    assert command.count("set ") == 1
    assert "B=" not in command
    assert "C=" not in command
    assert "D=" not in command


def test_cmd_assignment_value_stops_before_chain_operator() -> None:
    command = render_launch_command(DEMO, CLAUDE, [EnvVariable(key="A", value="1")], ShellDialect.CMD)

    assert 'set "A=1" && claude' in command
    assert "A=1 " not in command


def test_env_assignments_keep_store_order_and_precede_cli() -> None:
    variables = [
        EnvVariable(key="ZED", value="z"),
        EnvVariable(key="ALPHA", value="a"),
    ]
    statements = build_launch_chain(DEMO, CLAUDE, variables, ShellDialect.CMD).statements

    assert statements[2:] == ['set "ZED=z"', 'set "ALPHA=a"', "claude"]


def test_posix_env_values_are_quoted() -> None:
    variables = [EnvVariable(key="ANTHROPIC_BASE_URL", value="https://api.example.com")]
    statements = build_launch_chain(DEMO, CLAUDE, variables, ShellDialect.POSIX).statements

    assert 'export ANTHROPIC_BASE_URL="https://api.example.com"' in statements


def test_quote_does_not_escape() -> None:
    assert quote('a "b" c') == '"a "b" c"'


def test_chain_builder_is_fluent() -> None:
    rendered = CommandChain(ShellDialect.CMD).cd("D:\\x").set_env("K", "V").add("run").render()
    assert rendered == 'cd /d "D:\\x" && set "K=V" && run'


def test_ide_command_defaults_args_to_dot() -> None:
    ide = IDETagInfo(id="i1", name="VS Code", executable_path="code", command_args=None)
    assert render_ide_command(DEMO, ide) == 'code . "C:\\proj\\demo"'

    blank = ide.model_copy(update={"command_args": "  "})
    assert render_ide_command(DEMO, blank) == 'code . "C:\\proj\\demo"'


def test_ide_command_uses_configured_args() -> None:
    ide = IDETagInfo(id="i1", name="WebStorm", executable_path="webstorm", command_args="--nosplash")
    assert render_ide_command(DEMO, ide) == 'webstorm --nosplash "C:\\proj\\demo"'


@pytest.mark.parametrize(("setting", "expected"), [("cmd", ShellDialect.CMD), ("posix", ShellDialect.POSIX)])
def test_explicit_dialect_setting(setting: str, expected: ShellDialect) -> None:
    assert default_dialect(setting) is expected


def test_auto_dialect_follows_platform(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("vibegallery.gallery.launch.renderer.sys.platform", "win32")
    assert default_dialect("auto") is ShellDialect.CMD

    monkeypatch.setattr("vibegallery.gallery.launch.renderer.sys.platform", "darwin")
    assert default_dialect("auto") is ShellDialect.POSIX
