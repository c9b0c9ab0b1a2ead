"""
Versioned schema migrations.

Applied versions are recorded in ``schema_version``; pending ones run in
ascending order on the autocommit connection; the version row is written only
after its step succeeds. Steps run DDL through executescript, which commits on
its own, so each step is idempotent instead of transactional and a database
touched by the older per-script migrations converges to the same schema.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from sqlite3 import Connection
from typing import Callable

from .add_place_columns import add_accessibility, add_address_fields, add_social_media
from .add_second_phone import add_second_phone
from .add_specialties import create_feedback_tables, create_specialty_tables
from .base_schema import create_base_schema

logger = logging.getLogger(__name__)

VERSION_DDL = """
CREATE TABLE IF NOT EXISTS schema_version (
  version INTEGER PRIMARY KEY,
  name TEXT NOT NULL,
  applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    apply: Callable[[Connection], object]


MIGRATIONS: list[Migration] = [
    Migration(1, "base_schema", create_base_schema),
    Migration(2, "second_phone", add_second_phone),
    Migration(3, "social_media", add_social_media),
    Migration(4, "address_fields", add_address_fields),
    Migration(5, "accessibility", add_accessibility),
    Migration(6, "specialties", create_specialty_tables),
    Migration(7, "specialty_feedback", create_feedback_tables),
]


def ensure_version_table(conn: Connection):
    conn.execute(VERSION_DDL)


def applied_versions(conn: Connection) -> set[int]:
    ensure_version_table(conn)
    return {r[0] for r in conn.execute("SELECT version FROM schema_version").fetchall()}


def current_version(conn: Connection) -> int:
    return max(applied_versions(conn), default=0)


def apply_migrations(conn: Connection, migrations: list[Migration] | None = None) -> list[str]:
    """Apply pending migrations in version order; returns the names applied."""
    done = applied_versions(conn)
    applied: list[str] = []
    for m in sorted(migrations or MIGRATIONS, key=lambda x: x.version):
        if m.version in done:
            continue
        logger.info("Applying migration %d: %s", m.version, m.name)
        try:
            m.apply(conn)
            conn.execute(
                "INSERT INTO schema_version(version, name) VALUES(?, ?)",
                (m.version, m.name),
            )
        except Exception:
            logger.exception("Migration %d (%s) failed", m.version, m.name)
            raise
        applied.append(m.name)
    if not applied:
        logger.info("Schema up to date at version %d", current_version(conn))
    return applied
