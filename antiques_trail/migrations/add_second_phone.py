#!/usr/bin/env python3
"""
Migration: add second_phone column to the places table.

Usage:
  python -m antiques_trail.migrations.add_second_phone [--db path/to.db]
"""
from __future__ import annotations

import logging
import sqlite3

from .utils import add_column_if_absent

logger = logging.getLogger(__name__)


def add_second_phone(conn: sqlite3.Connection) -> bool:
    logger.info("Checking if second_phone column exists...")
    return add_column_if_absent(conn, "places", "second_phone", "TEXT")


def migrate_second_phone(db_path: str) -> bool:
    """Run the migration against db_path; the connection is closed on every path."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row

    try:
        added = add_second_phone(conn)
        conn.commit()
        logger.info("Migration completed")
        return added
    except Exception as e:
        conn.rollback()
        logger.error("Migration failed: %s", e)
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    import argparse
    from ..db import get_db_path
    from ..logs import setup_logging

    ap = argparse.ArgumentParser()
    ap.add_argument("--db", default=None)
    args = ap.parse_args()

    setup_logging("INFO")
    db_path = args.db or get_db_path()
    logger.info("Running second_phone migration on %s", db_path)
    migrate_second_phone(db_path)
