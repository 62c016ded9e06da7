"""Relational schema for the launcher database.

Three tables make up the store:
- meta: key/value metadata (currently only ``active_group_id``)
- groups: one row per group, ordered by ``position``
- apps: one row per app shortcut, ordered by ``position`` within its group

The schema is created with "if not exists" semantics so it is safe to run
on every open. Existing tables are never dropped or altered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import sqlite3

logger = logging.getLogger(__name__)

# Key of the meta row holding the active group pointer
ACTIVE_GROUP_KEY = "active_group_id"

TABLES = ("meta", "groups", "apps")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS meta (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS groups (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    position INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS apps (
    id TEXT PRIMARY KEY,
    group_id TEXT NOT NULL,
    name TEXT NOT NULL,
    path TEXT NOT NULL,
    args TEXT NOT NULL,
    position INTEGER NOT NULL,
    added_at INTEGER NOT NULL,
    FOREIGN KEY(group_id) REFERENCES groups(id) ON DELETE CASCADE
);
"""


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the meta, groups and apps tables if they are absent.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(SCHEMA_SQL)
    logger.debug("Ensured launcher schema: %s", ", ".join(TABLES))

