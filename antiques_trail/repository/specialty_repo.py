from __future__ import annotations

from sqlite3 import Connection
from typing import Iterable, Optional

from . import placeholders

_COLS = "s.id, s.name, s.description, s.parent_id"


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM specialties s ORDER BY s.name").fetchall()


def list_main(conn: Connection):
    return conn.execute(
        f"SELECT {_COLS} FROM specialties s WHERE s.parent_id IS NULL ORDER BY s.name"
    ).fetchall()


def list_children(conn: Connection, parent_id: int):
    return conn.execute(
        f"SELECT {_COLS} FROM specialties s WHERE s.parent_id = ? ORDER BY s.name",
        (int(parent_id),),
    ).fetchall()


def list_by_ids(conn: Connection, ids: Iterable[int]):
    ids = list(ids)
    if not ids:
        return []
    return conn.execute(
        f"SELECT {_COLS} FROM specialties s WHERE s.id IN ({placeholders(len(ids))}) ORDER BY s.name",
        ids,
    ).fetchall()


def list_by_names(conn: Connection, names: Iterable[str]):
    names = list(names)
    if not names:
        return []
    cond = " OR ".join(["s.name = ? COLLATE NOCASE"] * len(names))
    return conn.execute(f"SELECT {_COLS} FROM specialties s WHERE {cond} ORDER BY s.name", names).fetchall()


def list_by_place(conn: Connection, place_id: int):
    return conn.execute(
        f"""
        SELECT {_COLS}
        FROM specialties s
        JOIN place_specialties ps ON s.id = ps.specialty_id
        WHERE ps.place_id = ?
        ORDER BY s.parent_id IS NOT NULL, s.name
        """,
        (int(place_id),),
    ).fetchall()


def list_with_parents_for_place(conn: Connection, place_id: int):
    """Specialties linked to the place plus the parents of linked subcategories."""
    return conn.execute(
        f"""
        SELECT {_COLS}
        FROM specialties s
        WHERE s.id IN (SELECT specialty_id FROM place_specialties WHERE place_id = :pid)
           OR s.id IN (
                SELECT c.parent_id FROM specialties c
                JOIN place_specialties ps ON ps.specialty_id = c.id
                WHERE ps.place_id = :pid AND c.parent_id IS NOT NULL
           )
        ORDER BY s.name
        """,
        {"pid": int(place_id)},
    ).fetchall()


def list_by_type(conn: Connection, type_id: int):
    return conn.execute(
        f"""
        SELECT {_COLS}
        FROM specialties s
        JOIN place_type_specialties pts ON s.id = pts.specialty_id
        WHERE pts.type_id = ?
        ORDER BY s.name
        """,
        (int(type_id),),
    ).fetchall()


def get_one(conn: Connection, specialty_id: int):
    return conn.execute(f"SELECT {_COLS} FROM specialties s WHERE s.id = ?", (int(specialty_id),)).fetchone()


def find_by_name(conn: Connection, name: str):
    return conn.execute("SELECT id FROM specialties WHERE name = ? COLLATE NOCASE", (name,)).fetchone()


def insert_specialty(conn: Connection, name: str, description: Optional[str] = None, parent_id: Optional[int] = None) -> int:
    cur = conn.execute(
        "INSERT INTO specialties(name, description, parent_id) VALUES(?, ?, ?)",
        (name, description, parent_id),
    )
    return cur.lastrowid


def update_specialty(conn: Connection, specialty_id: int, fields: dict) -> bool:
    allowed = [k for k in ("name", "description", "parent_id") if k in fields]
    if not allowed:
        return False
    sets = ", ".join(f"{k}=?" for k in allowed)
    params = [fields[k] for k in allowed] + [int(specialty_id)]
    cur = conn.execute(f"UPDATE specialties SET {sets} WHERE id=?", params)
    return cur.rowcount > 0


def delete_specialty(conn: Connection, specialty_id: int) -> bool:
    cur = conn.execute("DELETE FROM specialties WHERE id=?", (int(specialty_id),))
    return cur.rowcount > 0


def detach_children(conn: Connection, specialty_id: int):
    conn.execute("UPDATE specialties SET parent_id = NULL WHERE parent_id = ?", (int(specialty_id),))


def specialty_counts(conn: Connection):
    # LEFT JOIN keeps specialties with no places (count 0)
    return conn.execute(
        """
        SELECT
          s.id,
          s.name,
          s.parent_id,
          COUNT(DISTINCT ps.place_id) AS place_count
        FROM specialties s
        LEFT JOIN place_specialties ps ON s.id = ps.specialty_id
        GROUP BY s.id
        ORDER BY s.name
        """
    ).fetchall()


def place_specialty_ids(conn: Connection, place_id: int) -> list[int]:
    rows = conn.execute(
        "SELECT specialty_id FROM place_specialties WHERE place_id = ? ORDER BY specialty_id",
        (int(place_id),),
    ).fetchall()
    return [r["specialty_id"] for r in rows]


def place_ids_for_specialty(conn: Connection, specialty_id: int) -> list[int]:
    rows = conn.execute(
        "SELECT place_id FROM place_specialties WHERE specialty_id = ? ORDER BY place_id",
        (int(specialty_id),),
    ).fetchall()
    return [r["place_id"] for r in rows]


def replace_place_specialties(conn: Connection, place_id: int, specialty_ids: Iterable[int]):
    """Delete then re-insert the place's join rows; caller owns the transaction."""
    conn.execute("DELETE FROM place_specialties WHERE place_id = ?", (int(place_id),))
    conn.executemany(
        "INSERT OR IGNORE INTO place_specialties(place_id, specialty_id) VALUES(?, ?)",
        [(int(place_id), int(sid)) for sid in specialty_ids],
    )


def link_type(conn: Connection, type_id: int, specialty_id: int):
    conn.execute(
        "INSERT OR IGNORE INTO place_type_specialties(type_id, specialty_id) VALUES(?, ?)",
        (int(type_id), int(specialty_id)),
    )


def count_all(conn: Connection) -> int:
    return conn.execute("SELECT COUNT(*) AS cnt FROM specialties").fetchone()["cnt"]
