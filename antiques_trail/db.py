from __future__ import annotations

# antiques_trail/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os

from .config import get_settings, is_test_env, project_root

# DB path resolution order:
# 1) env ANTIQUES_DB_PATH
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) <project root>/data/edinburgh-antiques.db
_DEFAULT_DB = os.path.join(project_root(), "data", "edinburgh-antiques.db")


def get_db_path(_: str | None = None) -> str:
    env_path = os.environ.get("ANTIQUES_DB_PATH")
    cfg = get_settings()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _DEFAULT_DB

    if path != ":memory:":
        dirn = os.path.dirname(path) or "."
        os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection for the duration of the block.

    Uses the explicit db_path when given, otherwise get_db_path(). Foreign keys
    are enforced, rows come back as sqlite3.Row, and the connection runs in
    autocommit mode; use transaction() for multi-statement writes.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        if path != ":memory:":
            conn.execute("PRAGMA journal_mode = WAL;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    conn.execute("BEGIN")
    try:
        yield conn
    except Exception:
        conn.execute("ROLLBACK")
        raise
    else:
        conn.execute("COMMIT")
