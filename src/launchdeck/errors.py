"""Exception hierarchy shared by the launchdeck packages."""

from __future__ import annotations

from pathlib import Path


class LaunchdeckError(Exception):
    """Base class for all launchdeck errors."""


class PathResolutionError(LaunchdeckError):
    """Raised when the per-user application data directory cannot be found."""


class StorageIOError(LaunchdeckError):
    """Raised on filesystem or database failure while opening, reading or writing.

    Args:
        message: Error description
        path: Path to the database file involved, if known
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class SnapshotEditError(LaunchdeckError):
    """Raised when an edit names an unknown group/app or carries invalid input."""


class LaunchError(LaunchdeckError):
    """Raised when an external program cannot be started."""
