"""Schema/connection management for the launcher database.

Resolves where ``launcher.db`` lives, makes sure its directory exists,
opens a connection with foreign keys enforced and ensures the schema.
The manager keeps no state beyond its configuration; every ``open()``
hands back a fresh connection owned by the caller.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from launchdeck.errors import StorageIOError
from launchdeck.paths import DB_FILENAME, get_data_dir
from launchdeck.state.schema import ensure_schema

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Opens connections to the launcher database.

    Args:
        data_dir: Directory holding the database. Defaults to the XDG
            data directory for launchdeck.
        filename: Database file name inside ``data_dir``

    Example:
        >>> manager = ConnectionManager()
        >>> with manager.connect() as conn:
        ...     conn.execute("SELECT COUNT(1) FROM groups").fetchone()
    """

    def __init__(
        self,
        data_dir: str | Path | None = None,
        filename: str = DB_FILENAME,
    ) -> None:
        self.data_dir = Path(data_dir).expanduser() if data_dir is not None else None
        self.filename = filename

    def resolve_path(self) -> Path:
        """Return the database file path.

        Returns:
            Path to the database file inside the data directory

        Raises:
            PathResolutionError: If the data directory cannot be determined
        """
        base_dir = self.data_dir if self.data_dir is not None else get_data_dir()
        return base_dir / self.filename

    def open(self) -> sqlite3.Connection:
        """Open the database, creating the file and schema if needed.

        Returns:
            SQLite connection with foreign keys enabled and row factory set

        Raises:
            PathResolutionError: If the data directory cannot be determined
            StorageIOError: On filesystem or database-engine failure
        """
        path = self.resolve_path()

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create data directory {path.parent}: {e}"
            raise StorageIOError(msg, path) from e

        is_new = not path.exists()

        try:
            conn = sqlite3.connect(str(path))
        except sqlite3.Error as e:
            msg = f"Cannot open database {path}: {e}"
            raise StorageIOError(msg, path) from e

        try:
            conn.row_factory = sqlite3.Row
            # WAL lets a load keep its snapshot while a save commits
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA foreign_keys=ON")
            ensure_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            msg = f"Cannot initialize database {path}: {e}"
            raise StorageIOError(msg, path) from e

        # Database holds local paths; keep it private to the user
        if is_new:
            try:
                os.chmod(path, 0o600)  # noqa: PTH101
                logger.debug("Set database permissions to 600: %s", path)
            except OSError as e:
                logger.warning("Could not set database permissions: %s", e)

        logger.debug("Opened launcher database: %s", path)
        return conn

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for the duration of a ``with`` block.

        Yields:
            The open connection, closed when the block exits
        """
        conn = self.open()
        try:
            yield conn
        finally:
            conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Context manager for transactional operations.

    Commits when the block succeeds, rolls back and re-raises otherwise.

    Yields:
        The database connection
    """
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
