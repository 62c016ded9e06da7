"""Shared pytest fixtures for launchdeck tests.

This module provides common fixtures for:
- Temporary directories and an isolated XDG environment
- Temporary config files
- Test database instances
- Sample launcher snapshots
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import yaml

from launchdeck.state import (
    AppEntry,
    ConnectionManager,
    Group,
    LauncherState,
    StateRepository,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories and the working directory into ``temp_dir``.

    Keeps tests away from the real ~/.local/share and ~/.config.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir / "xdg-data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "xdg-config"))
    monkeypatch.delenv("LAUNCHDECK_CONFIG", raising=False)
    monkeypatch.chdir(temp_dir)
    return temp_dir


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def write_config(temp_dir: Path) -> Callable[..., Path]:
    """Factory fixture to write config files.

    Args:
        config: Configuration dictionary
        filename: Name of the config file (default: config.yaml)

    Returns:
        Path to the written config file
    """

    def _write(config: dict[str, Any], filename: str = "config.yaml") -> Path:
        path = temp_dir / filename
        with path.open("w") as f:
            yaml.safe_dump(config, f)
        return path

    return _write


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def data_dir(temp_dir: Path) -> Path:
    """Return a data directory that does not exist yet."""
    return temp_dir / "data" / "launchdeck"


@pytest.fixture
def connections(data_dir: Path) -> ConnectionManager:
    """Return a ConnectionManager rooted at ``data_dir``."""
    return ConnectionManager(data_dir)


@pytest.fixture
def repository(connections: ConnectionManager) -> StateRepository:
    """Return a StateRepository backed by a fresh database."""
    return StateRepository(connections)


# ============================================================================
# Snapshot Fixtures
# ============================================================================


@pytest.fixture
def editor_app() -> AppEntry:
    """Return a single app entry without arguments."""
    return AppEntry(
        id="a1",
        name="Editor",
        path="/usr/bin/editor",
        args=None,
        added_at=1000,
    )


@pytest.fixture
def sample_state(editor_app: AppEntry) -> LauncherState:
    """Return a two-group snapshot: Work with one app, Games empty."""
    return LauncherState(
        active_group_id="g1",
        groups=[
            Group(id="g1", name="Work", apps=[editor_app]),
            Group(id="g2", name="Games", apps=[]),
        ],
    )


@pytest.fixture
def rich_state() -> LauncherState:
    """Return a snapshot with several apps per group and mixed args."""
    return LauncherState(
        active_group_id="dev",
        groups=[
            Group(
                id="tools",
                name="Tools",
                apps=[
                    AppEntry(id="t1", name="Terminal", path="/usr/bin/xterm", args="-fa Mono", added_at=10),
                    AppEntry(id="t2", name="Files", path="/usr/bin/nautilus", args=None, added_at=5),
                    AppEntry(id="t3", name="Top", path="/usr/bin/htop", args=None, added_at=30),
                ],
            ),
            Group(
                id="dev",
                name="Development",
                apps=[
                    AppEntry(id="d1", name="Code", path="/usr/bin/code", args="--new-window .", added_at=99),
                    AppEntry(id="d2", name="Docs", path="https://docs.python.org", args=None, added_at=1),
                ],
            ),
            Group(id="empty", name="Empty", apps=[]),
        ],
    )
