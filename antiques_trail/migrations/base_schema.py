"""
Migration 1: core directory tables (place types, places, online sales links).
"""
from __future__ import annotations

from sqlite3 import Connection

DDL = """
CREATE TABLE IF NOT EXISTS place_types (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL UNIQUE,
  description TEXT,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS places (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  address TEXT NOT NULL,
  phone TEXT,
  email TEXT,
  website TEXT,
  description TEXT,
  specialties TEXT,
  opening_hours TEXT,
  lat REAL NOT NULL,
  lng REAL NOT NULL,
  type_id INTEGER NOT NULL,
  price_range TEXT,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY (type_id) REFERENCES place_types(id)
);
CREATE INDEX IF NOT EXISTS idx_places_type ON places(type_id);

CREATE TABLE IF NOT EXISTS online_sales_links (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  place_id INTEGER NOT NULL,
  platform_name TEXT NOT NULL,
  url TEXT NOT NULL,
  description TEXT,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY (place_id) REFERENCES places(id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_online_sales_place ON online_sales_links(place_id);

CREATE TRIGGER IF NOT EXISTS update_places_timestamp
AFTER UPDATE ON places
BEGIN
  UPDATE places SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
END;

CREATE TRIGGER IF NOT EXISTS update_place_types_timestamp
AFTER UPDATE ON place_types
BEGIN
  UPDATE place_types SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
END;
"""


def create_base_schema(conn: Connection):
    conn.executescript(DDL)
