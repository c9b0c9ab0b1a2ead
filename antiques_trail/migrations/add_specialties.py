"""
Migrations for the specialty taxonomy: the specialties table with its
parent hierarchy, join tables to places and place types, and the request /
search tracking tables.
"""
from __future__ import annotations

from sqlite3 import Connection

from .utils import add_column_if_absent

SPECIALTY_DDL = """
CREATE TABLE IF NOT EXISTS specialties (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  description TEXT,
  parent_id INTEGER REFERENCES specialties(id),
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS place_type_specialties (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  type_id INTEGER NOT NULL,
  specialty_id INTEGER NOT NULL,
  FOREIGN KEY (type_id) REFERENCES place_types(id) ON DELETE CASCADE,
  FOREIGN KEY (specialty_id) REFERENCES specialties(id) ON DELETE CASCADE,
  UNIQUE(type_id, specialty_id)
);

CREATE TABLE IF NOT EXISTS place_specialties (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  place_id INTEGER NOT NULL,
  specialty_id INTEGER NOT NULL,
  FOREIGN KEY (place_id) REFERENCES places(id) ON DELETE CASCADE,
  FOREIGN KEY (specialty_id) REFERENCES specialties(id) ON DELETE CASCADE,
  UNIQUE(place_id, specialty_id)
);
CREATE INDEX IF NOT EXISTS idx_place_specialties_specialty ON place_specialties(specialty_id);

CREATE TRIGGER IF NOT EXISTS update_specialties_timestamp
AFTER UPDATE ON specialties
BEGIN
  UPDATE specialties SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
END;
"""

FEEDBACK_DDL = """
CREATE TABLE IF NOT EXISTS specialty_requests (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  place_id INTEGER NOT NULL,
  request_text TEXT NOT NULL,
  status TEXT NOT NULL DEFAULT 'pending',
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY (place_id) REFERENCES places(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS specialty_searches (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  specialty_id INTEGER NOT NULL,
  user_ip TEXT,
  session_id TEXT,
  search_timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY (specialty_id) REFERENCES specialties(id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_specialty_searches_ts ON specialty_searches(search_timestamp);
"""


def create_specialty_tables(conn: Connection):
    conn.executescript(SPECIALTY_DDL)
    # databases created before the hierarchy existed lack parent_id
    add_column_if_absent(conn, "specialties", "parent_id", "INTEGER REFERENCES specialties(id)")


def create_feedback_tables(conn: Connection):
    conn.executescript(FEEDBACK_DDL)
