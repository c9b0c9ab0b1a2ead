from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Optional

from . import placeholders

# Columns writable through insert_place / update_place.
PLACE_COLUMNS = [
    "name",
    "address",
    "address_street",
    "address_area",
    "address_city",
    "address_postcode",
    "phone",
    "second_phone",
    "email",
    "website",
    "description",
    "specialties",
    "opening_hours",
    "lat",
    "lng",
    "type_id",
    "price_range",
    "has_disabled_access",
    "has_toilet_facilities",
    "trade_associations",
    "facebook_url",
    "instagram_url",
    "pinterest_url",
    "twitter_url",
    "youtube_url",
    "snapchat_url",
    "tiktok_url",
]

_BASE_SELECT = """
SELECT DISTINCT p.*, pt.name AS type_name
FROM places p
JOIN place_types pt ON p.type_id = pt.id
"""


def _specialty_condition(main_ids: list[int], sub_ids: list[int], sub_names: list[str]) -> tuple[str, list[Any]]:
    """SQL condition for the specialty filter.

    main only: places linked to the categories or to any of their children.
    sub only: places linked to the subcategories, or mentioning them in the text field.
    both: places linked to the selected subcategories only.
    """
    if sub_ids and main_ids:
        return (
            f"p.id IN (SELECT ps.place_id FROM place_specialties ps "
            f"WHERE ps.specialty_id IN ({placeholders(len(sub_ids))}))",
            list(sub_ids),
        )
    if sub_ids:
        parts = [
            f"SELECT ps.place_id FROM place_specialties ps "
            f"WHERE ps.specialty_id IN ({placeholders(len(sub_ids))})"
        ]
        params: list[Any] = list(sub_ids)
        if sub_names:
            likes = " OR ".join(["p2.specialties LIKE ? COLLATE NOCASE"] * len(sub_names))
            parts.append(f"SELECT p2.id FROM places p2 WHERE {likes}")
            params.extend(f"%{n}%" for n in sub_names)
        return "p.id IN (" + " UNION ".join(parts) + ")", params
    if main_ids:
        ph = placeholders(len(main_ids))
        return (
            f"p.id IN ("
            f"SELECT ps.place_id FROM place_specialties ps WHERE ps.specialty_id IN ({ph}) "
            f"UNION "
            f"SELECT ps.place_id FROM place_specialties ps "
            f"JOIN specialties s ON ps.specialty_id = s.id WHERE s.parent_id IN ({ph}))",
            list(main_ids) + list(main_ids),
        )
    return "", []


def list_places(
    conn: Connection,
    type_id: Optional[int] = None,
    price_range: Optional[str] = None,
    search: Optional[str] = None,
    specialty_filter: Optional[dict] = None,
):
    """Places joined with their type name, ordered by name.

    specialty_filter: {"main_ids": [...], "sub_ids": [...], "sub_names": [...]}
    """
    sql = _BASE_SELECT
    where: list[str] = []
    params: list[Any] = []
    if search:
        sql += (
            "LEFT JOIN place_specialties sps ON p.id = sps.place_id\n"
            "LEFT JOIN specialties s ON sps.specialty_id = s.id\n"
        )
        where.append(
            "(p.name LIKE ? COLLATE NOCASE OR p.address LIKE ? COLLATE NOCASE "
            "OR p.description LIKE ? COLLATE NOCASE OR p.specialties LIKE ? COLLATE NOCASE "
            "OR s.name LIKE ? COLLATE NOCASE)"
        )
        params.extend([f"%{search}%"] * 5)
    if type_id is not None:
        where.append("p.type_id = ?")
        params.append(int(type_id))
    if price_range:
        where.append("p.price_range = ?")
        params.append(price_range)
    if specialty_filter:
        cond, cparams = _specialty_condition(
            specialty_filter.get("main_ids") or [],
            specialty_filter.get("sub_ids") or [],
            specialty_filter.get("sub_names") or [],
        )
        if cond:
            where.append(cond)
            params.extend(cparams)
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY p.name"
    return conn.execute(sql, params).fetchall()


def list_by_type(conn: Connection, type_id: int):
    return list_places(conn, type_id=type_id)


def get_one(conn: Connection, place_id: int):
    sql = (
        "SELECT p.*, pt.name AS type_name FROM places p "
        "JOIN place_types pt ON p.type_id = pt.id WHERE p.id = ?"
    )
    return conn.execute(sql, (int(place_id),)).fetchone()


def exists(conn: Connection, place_id: int) -> bool:
    row = conn.execute("SELECT 1 FROM places WHERE id=?", (int(place_id),)).fetchone()
    return row is not None


def insert_place(conn: Connection, data: dict) -> int:
    cols = [c for c in PLACE_COLUMNS if c in data]
    sql = f"INSERT INTO places ({', '.join(cols)}) VALUES ({placeholders(len(cols))})"
    cur = conn.execute(sql, [data[c] for c in cols])
    return cur.lastrowid


def update_place(conn: Connection, place_id: int, data: dict) -> bool:
    cols = [c for c in PLACE_COLUMNS if c in data]
    if not cols:
        return False
    sets = ", ".join(f"{c} = :{c}" for c in cols)
    params = {c: data[c] for c in cols}
    params["id"] = int(place_id)
    cur = conn.execute(f"UPDATE places SET {sets} WHERE id = :id", params)
    return cur.rowcount > 0


def delete_place(conn: Connection, place_id: int) -> bool:
    cur = conn.execute("DELETE FROM places WHERE id = ?", (int(place_id),))
    return cur.rowcount > 0


def set_specialties_text(conn: Connection, place_id: int, text: str):
    conn.execute("UPDATE places SET specialties = ? WHERE id = ?", (text, int(place_id)))


def list_with_specialties_text(conn: Connection):
    return conn.execute(
        "SELECT id, name, specialties FROM places "
        "WHERE specialties IS NOT NULL AND specialties != '' ORDER BY id"
    ).fetchall()


def list_opening_hours(conn: Connection):
    return conn.execute(
        "SELECT id, name, opening_hours FROM places "
        "WHERE opening_hours IS NOT NULL AND opening_hours != '' ORDER BY id"
    ).fetchall()


def set_opening_hours(conn: Connection, place_id: int, text: str):
    conn.execute("UPDATE places SET opening_hours = ? WHERE id = ?", (text, int(place_id)))


def count_all(conn: Connection) -> int:
    return conn.execute("SELECT COUNT(*) AS cnt FROM places").fetchone()["cnt"]


def counts_by_type(conn: Connection):
    return conn.execute(
        """
        SELECT pt.name AS type, COUNT(*) AS count
        FROM places p
        JOIN place_types pt ON p.type_id = pt.id
        GROUP BY p.type_id
        ORDER BY count DESC, pt.name
        """
    ).fetchall()


def counts_by_price_range(conn: Connection):
    return conn.execute(
        """
        SELECT price_range AS priceRange, COUNT(*) AS count
        FROM places
        GROUP BY price_range
        ORDER BY
          CASE
            WHEN price_range = '£' THEN 1
            WHEN price_range = '££' THEN 2
            WHEN price_range = '£££' THEN 3
            WHEN price_range = '££££' THEN 4
            ELSE 5
          END
        """
    ).fetchall()
