"""XDG Base Directory Specification path utilities.

This module provides XDG-compliant paths for:
- Configuration files ($XDG_CONFIG_HOME/launchdeck, default: ~/.config/launchdeck)
- The launcher database ($XDG_DATA_HOME/launchdeck, default: ~/.local/share/launchdeck)

Reference: https://specifications.freedesktop.org/basedir-spec/latest/
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from launchdeck.errors import PathResolutionError

logger = logging.getLogger(__name__)

# XDG environment variable names
XDG_CONFIG_HOME = "XDG_CONFIG_HOME"
XDG_DATA_HOME = "XDG_DATA_HOME"

# Application name used in XDG directories
APP_NAME = "launchdeck"

# Fixed name of the database file inside the data directory
DB_FILENAME = "launcher.db"


def _home() -> Path:
    """Return the user's home directory.

    Raises:
        PathResolutionError: If the host cannot tell us where home is
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        msg = f"Cannot determine the user's home directory: {e}"
        raise PathResolutionError(msg) from e


def get_config_home() -> Path:
    """Get the XDG config home directory.

    Returns:
        Path from $XDG_CONFIG_HOME or ~/.config if not set
    """
    xdg_config = os.environ.get(XDG_CONFIG_HOME)
    if xdg_config:
        return Path(xdg_config).expanduser()
    return _home() / ".config"


def get_data_home() -> Path:
    """Get the XDG data home directory.

    Returns:
        Path from $XDG_DATA_HOME or ~/.local/share if not set

    Raises:
        PathResolutionError: If neither $XDG_DATA_HOME nor a home directory exists
    """
    xdg_data = os.environ.get(XDG_DATA_HOME)
    if xdg_data:
        return Path(xdg_data).expanduser()
    return _home() / ".local" / "share"


def get_config_dir() -> Path:
    """Get the application config directory."""
    return get_config_home() / APP_NAME


def get_data_dir() -> Path:
    """Get the application-private data directory (where launcher.db lives)."""
    return get_data_home() / APP_NAME


def get_default_config_path() -> Path:
    """Get the default config file path.

    Returns:
        Path to config.yaml in the config directory
    """
    return get_config_dir() / "config.yaml"

