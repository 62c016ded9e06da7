"""Start external programs from stored app shortcuts.

An AppEntry keeps its launch arguments as a single string. This module
splits that string into an argument list and spawns the program without
waiting for it:

- no arguments: the platform's default "open" (explorer on Windows,
  ``open`` on macOS, direct execution elsewhere)
- with arguments: the path is executed directly with the argument list
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from typing import TYPE_CHECKING

from launchdeck.errors import LaunchError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from launchdeck.state.models import AppEntry

logger = logging.getLogger(__name__)


def split_args(args: str | None) -> list[str]:
    """Split a stored argument string into an argument list.

    Args:
        args: Argument string using shell quoting rules, or None

    Returns:
        List of arguments (empty for None or blank input)

    Raises:
        LaunchError: If the string has unbalanced quotes
    """
    if args is None or not args.strip():
        return []
    try:
        return shlex.split(args, posix=not sys.platform.startswith("win"))
    except ValueError as e:
        msg = f"Cannot parse launch arguments {args!r}: {e}"
        raise LaunchError(msg) from e


def _default_open_command(path: str) -> list[str]:
    if sys.platform.startswith("win"):
        return ["explorer", path]
    if sys.platform == "darwin":
        return ["open", path]
    return [path]


def spawn_external_process(path: str, args: Sequence[str]) -> None:
    """Spawn an external program and return immediately.

    Args:
        path: Executable or file path to start
        args: Argument list; empty uses the platform default-open behavior

    Raises:
        LaunchError: If the process cannot be started
    """
    command = [path, *args] if args else _default_open_command(path)

    try:
        subprocess.Popen(  # noqa: S603
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=not sys.platform.startswith("win"),
        )
    except OSError as e:
        msg = f"Cannot start {path}: {e}"
        raise LaunchError(msg) from e

    logger.info("Spawned external process: %s", command)


def launch_app(entry: AppEntry) -> None:
    """Start the program an AppEntry points at."""
    spawn_external_process(entry.path, split_args(entry.args))
