"""Tests for the Typer CLI."""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import structlog
from typer.testing import CliRunner

from launchdeck import __version__
from launchdeck.cli import ExitCode, app
from launchdeck.state import ConnectionManager, LauncherState, StateRepository

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo the logging setup each CLI invocation performs."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def invoke(data_dir: Path) -> Callable[..., Any]:
    """Invoke the CLI against the test data directory."""

    def _invoke(*args: str) -> Any:
        return runner.invoke(app, ["--data-dir", str(data_dir), *args])

    return _invoke


@pytest.fixture
def stored(data_dir: Path) -> StateRepository:
    return StateRepository(ConnectionManager(data_dir))


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_path(invoke: Callable[..., Any], data_dir: Path) -> None:
    result = invoke("path")

    assert result.exit_code == 0
    assert result.stdout.strip() == str(data_dir / "launcher.db")


def test_show_first_run(invoke: Callable[..., Any]) -> None:
    result = invoke("show")

    assert result.exit_code == ExitCode.SUCCESS
    assert "No launcher state found" in result.stdout


def test_show_marks_active_group(
    invoke: Callable[..., Any], stored: StateRepository, sample_state: LauncherState
) -> None:
    stored.save(sample_state)
    result = invoke("show")

    assert result.exit_code == 0
    assert "* Work (g1)" in result.stdout
    assert "  Games (g2)" in result.stdout
    assert "Editor  /usr/bin/editor  [a1]" in result.stdout
    assert "(empty)" in result.stdout


def test_group_add_then_app_add(
    invoke: Callable[..., Any], stored: StateRepository
) -> None:
    result = invoke("group", "add", "Work")
    assert result.exit_code == 0
    group_id = result.stdout.strip().splitlines()[-1]

    result = invoke("app", "add", group_id, "/usr/bin/editor", "/usr/bin/shell")
    assert result.exit_code == 0
    assert "Added 2 item(s)" in result.stdout

    state = stored.load()
    assert state.active_group_id == group_id
    assert [a.name for a in state.groups[0].apps] == ["editor", "shell"]


def test_group_edits_persist(
    invoke: Callable[..., Any], stored: StateRepository, sample_state: LauncherState
) -> None:
    stored.save(sample_state)

    assert invoke("group", "rename", "g2", "Play").exit_code == 0
    assert invoke("group", "activate", "g2").exit_code == 0
    state = stored.load()
    assert state.get_group("g2").name == "Play"
    assert state.active_group_id == "g2"

    assert invoke("group", "remove", "g2").exit_code == 0
    state = stored.load()
    assert [g.id for g in state.groups] == ["g1"]
    assert state.active_group_id == "g1"


def test_removing_last_group_returns_to_first_run(
    invoke: Callable[..., Any], stored: StateRepository, sample_state: LauncherState
) -> None:
    stored.save(sample_state)
    invoke("group", "remove", "g1")
    invoke("group", "remove", "g2")

    assert stored.load() is None


def test_app_edits_persist(
    invoke: Callable[..., Any], stored: StateRepository, rich_state: LauncherState
) -> None:
    stored.save(rich_state)

    assert invoke("app", "move", "t3", "tools", "--index", "0").exit_code == 0
    assert invoke("app", "args", "t2", "--", "--sort name").exit_code == 0
    assert invoke("app", "remove", "d2").exit_code == 0

    state = stored.load()
    assert [a.id for a in state.get_group("tools").apps] == ["t3", "t1", "t2"]
    assert state.get_group("tools").apps[2].args == "--sort name"
    assert [a.id for a in state.get_group("dev").apps] == ["d1"]


def test_unknown_group_is_input_error(
    invoke: Callable[..., Any], stored: StateRepository, sample_state: LauncherState
) -> None:
    stored.save(sample_state)
    result = invoke("group", "activate", "nope")

    assert result.exit_code == ExitCode.INPUT_ERROR
    assert stored.load() == sample_state


def test_launch(
    invoke: Callable[..., Any],
    stored: StateRepository,
    rich_state: LauncherState,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[list[str]] = []

    def _popen(command: list[str], **_kwargs: Any) -> None:
        calls.append(command)

    monkeypatch.setattr(subprocess, "Popen", _popen)
    stored.save(rich_state)

    result = invoke("launch", "d1")

    assert result.exit_code == 0
    assert "Launched Code" in result.stdout
    assert calls == [["/usr/bin/code", "--new-window", "."]]


def test_launch_failure(
    invoke: Callable[..., Any],
    stored: StateRepository,
    rich_state: LauncherState,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _popen(*_args: Any, **_kwargs: Any) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(subprocess, "Popen", _popen)
    stored.save(rich_state)

    assert invoke("launch", "t1").exit_code == ExitCode.LAUNCH_ERROR


def test_export_to_stdout(
    invoke: Callable[..., Any], stored: StateRepository, sample_state: LauncherState
) -> None:
    stored.save(sample_state)
    result = invoke("export")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["activeGroupId"] == "g1"
    assert [g["id"] for g in data["groups"]] == ["g1", "g2"]


def test_export_import_between_stores(
    invoke: Callable[..., Any],
    stored: StateRepository,
    rich_state: LauncherState,
    temp_dir: Path,
) -> None:
    stored.save(rich_state)
    dump = temp_dir / "dump.json"
    assert invoke("export", "--output", str(dump)).exit_code == 0

    other_dir = temp_dir / "other"
    result = runner.invoke(app, ["--data-dir", str(other_dir), "import", str(dump)])

    assert result.exit_code == 0
    assert StateRepository(ConnectionManager(other_dir)).load() == rich_state


def test_import_invalid_snapshot(invoke: Callable[..., Any], temp_dir: Path) -> None:
    bad = temp_dir / "bad.json"
    bad.write_text('{"version": 1, "groups": [{"name": "no id"}]}')

    assert invoke("import", str(bad)).exit_code == ExitCode.INPUT_ERROR


def test_missing_config_is_config_error(temp_dir: Path) -> None:
    result = runner.invoke(app, ["--config", str(temp_dir / "missing.yaml"), "show"])

    assert result.exit_code == ExitCode.CONFIG_ERROR


def test_config_sets_data_dir(
    write_config: Callable[..., Path], temp_dir: Path, sample_state: LauncherState
) -> None:
    config_dir = temp_dir / "from-config"
    path = write_config({"version": 1, "storage": {"data_dir": str(config_dir)}})
    StateRepository(ConnectionManager(config_dir)).save(sample_state)

    result = runner.invoke(app, ["--config", str(path), "show"])

    assert result.exit_code == 0
    assert "* Work (g1)" in result.stdout


def test_storage_error(temp_dir: Path) -> None:
    blocker = temp_dir / "blocker"
    blocker.write_text("not a directory")

    result = runner.invoke(app, ["--data-dir", str(blocker / "sub"), "show"])

    assert result.exit_code == ExitCode.STORAGE_ERROR


def test_unresolvable_data_dir_is_storage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_home() -> Path:
        raise RuntimeError("no home")

    monkeypatch.delenv("XDG_DATA_HOME")
    monkeypatch.setattr(Path, "home", staticmethod(_no_home))

    result = runner.invoke(app, ["show"])

    assert result.exit_code == ExitCode.STORAGE_ERROR
