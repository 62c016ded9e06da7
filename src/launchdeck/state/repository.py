"""State repository: load and save complete launcher snapshots.

This module provides the StateRepository class that handles:
- Reconstructing the group/app hierarchy from the database (load)
- Atomically replacing the whole store with a new snapshot (save)
- Repairing a missing or stale active group pointer on load
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from launchdeck.errors import StorageIOError
from launchdeck.state.connection import ConnectionManager, transaction
from launchdeck.state.models import STATE_VERSION, AppEntry, Group, LauncherState
from launchdeck.state.schema import ACTIVE_GROUP_KEY

if TYPE_CHECKING:
    from launchdeck.config.schema import StorageConfig

logger = logging.getLogger(__name__)


class StateRepository:
    """SQLite-backed persistence for the launcher snapshot.

    A connection is opened for each call and closed when it returns.
    ``save`` always replaces every row inside one transaction, so a reader
    sees either the previous snapshot or the new one, never a mix.

    Args:
        connections: Connection manager to open the database with.
            Defaults to one pointing at the XDG data directory.

    Example:
        >>> repo = StateRepository()
        >>> state = repo.load()
        >>> if state is None:
        ...     state = LauncherState()
        >>> repo.save(state)
    """

    def __init__(self, connections: ConnectionManager | None = None) -> None:
        self.connections = connections or ConnectionManager()

    @classmethod
    def from_config(cls, storage: StorageConfig) -> StateRepository:
        """Build a repository from the ``storage`` config section."""
        return cls(ConnectionManager(storage.data_dir, storage.filename))

    @property
    def db_path(self) -> Path:
        """Resolved path of the database file."""
        return self.connections.resolve_path()

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load(self) -> LauncherState | None:
        """Load the last persisted snapshot.

        Returns:
            The stored LauncherState, or None if no group has ever been
            saved (first run)

        Raises:
            PathResolutionError: If the data directory cannot be determined
            StorageIOError: If the database cannot be opened or read
        """
        with self.connections.connect() as conn:
            try:
                # One read transaction so a concurrent save is seen whole or not at all
                conn.execute("BEGIN")
                with transaction(conn):
                    return self._load(conn)
            except sqlite3.Error as e:
                msg = f"Cannot read launcher state: {e}"
                raise StorageIOError(msg, self.db_path) from e

    def _load(self, conn: sqlite3.Connection) -> LauncherState | None:
        row = conn.execute("SELECT COUNT(1) FROM groups").fetchone()
        if row is None or row[0] == 0:
            logger.debug("No groups stored; reporting first run")
            return None

        stored_active_id = self._read_active_group_id(conn)

        groups = [
            Group(id=row["id"], name=row["name"])
            for row in conn.execute("SELECT id, name FROM groups ORDER BY position ASC")
        ]

        apps_by_group: dict[str, list[AppEntry]] = {}
        cursor = conn.execute(
            """
            SELECT id, group_id, name, path, args, added_at
            FROM apps
            ORDER BY position ASC
            """
        )
        for row in cursor:
            args = row["args"]
            apps_by_group.setdefault(row["group_id"], []).append(
                AppEntry(
                    id=row["id"],
                    name=row["name"],
                    path=row["path"],
                    args=args if args and args.strip() else None,
                    added_at=row["added_at"],
                )
            )

        for group in groups:
            group.apps = apps_by_group.pop(group.id, [])

        if apps_by_group:
            logger.warning(
                "Dropped apps referencing unknown groups: %s",
                ", ".join(sorted(apps_by_group)),
            )

        active_group_id = _resolve_active_group(stored_active_id, groups)
        logger.debug(
            "Loaded launcher state: %d group(s), active=%s",
            len(groups),
            active_group_id,
        )
        return LauncherState(
            version=STATE_VERSION,
            active_group_id=active_group_id,
            groups=groups,
        )

    @staticmethod
    def _read_active_group_id(conn: sqlite3.Connection) -> str:
        """Read the stored active group id; any failure reads as empty."""
        try:
            row = conn.execute(
                "SELECT value FROM meta WHERE key = ? LIMIT 1",
                (ACTIVE_GROUP_KEY,),
            ).fetchone()
        except sqlite3.Error as e:
            logger.debug("Could not read active group id: %s", e)
            return ""
        if row is None or row[0] is None:
            return ""
        return str(row[0])

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def save(self, state: LauncherState) -> None:
        """Replace the stored snapshot with ``state`` atomically.

        Every row is deleted and re-inserted inside one transaction. The
        active group id is written verbatim; it is validated on load.

        Args:
            state: Complete snapshot to persist

        Raises:
            PathResolutionError: If the data directory cannot be determined
            StorageIOError: If any delete or insert fails. Nothing is
                persisted in that case and the previous snapshot is intact.
        """
        with self.connections.connect() as conn:
            try:
                with transaction(conn):
                    self._replace_all(conn, state)
            except sqlite3.Error as e:
                msg = f"Cannot save launcher state: {e}"
                raise StorageIOError(msg, self.db_path) from e

        logger.debug(
            "Saved launcher state: %d group(s), active=%s",
            len(state.groups),
            state.active_group_id,
        )

    @staticmethod
    def _replace_all(conn: sqlite3.Connection, state: LauncherState) -> None:
        # Children before parents
        conn.execute("DELETE FROM apps")
        conn.execute("DELETE FROM groups")
        conn.execute("DELETE FROM meta")

        conn.execute(
            "INSERT INTO meta (key, value) VALUES (?, ?)",
            (ACTIVE_GROUP_KEY, state.active_group_id),
        )

        for group_pos, group in enumerate(state.groups):
            conn.execute(
                "INSERT INTO groups (id, name, position) VALUES (?, ?, ?)",
                (group.id, group.name, group_pos),
            )
            conn.executemany(
                """
                INSERT INTO apps (id, group_id, name, path, args, position, added_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        app.id,
                        group.id,
                        app.name,
                        app.path,
                        app.args or "",
                        app_pos,
                        app.added_at,
                    )
                    for app_pos, app in enumerate(group.apps)
                ],
            )


def _resolve_active_group(stored_id: str, groups: list[Group]) -> str:
    """Keep ``stored_id`` if it names a group, else fall back to the first group."""
    if stored_id and any(group.id == stored_id for group in groups):
        return stored_id
    fallback = groups[0].id if groups else ""
    if stored_id:
        logger.warning(
            "Active group %r not found; falling back to %r", stored_id, fallback
        )
    return fallback
