from __future__ import annotations

import logging
from sqlite3 import Connection

logger = logging.getLogger(__name__)


def column_names(conn: Connection, table: str) -> list[str]:
    return [r[1] for r in conn.execute(f"PRAGMA table_info({table})").fetchall()]


def add_column_if_absent(conn: Connection, table: str, column: str, decl: str) -> bool:
    """ALTER TABLE ... ADD COLUMN unless the column is already there.

    Returns True when the column was added.
    """
    if column in column_names(conn, table):
        logger.info("Column %s already exists", column)
        return False
    logger.info("Adding column: %s to %s table", column, table)
    conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {decl}")
    return True
