"""State management module for launchdeck.

This module provides SQLite-based persistence for the launcher snapshot:
- Connection management (database location, schema creation)
- StateRepository with load/save of complete snapshots
- Snapshot models (LauncherState, Group, AppEntry)

Usage:
    from launchdeck.state import StateRepository

    repo = StateRepository()  # XDG data path
    state = repo.load()       # None on first run
    repo.save(state)
"""

from launchdeck.state.connection import ConnectionManager
from launchdeck.state.models import STATE_VERSION, AppEntry, Group, LauncherState
from launchdeck.state.repository import StateRepository

__all__ = [
    "STATE_VERSION",
    "AppEntry",
    "ConnectionManager",
    "Group",
    "LauncherState",
    "StateRepository",
]
