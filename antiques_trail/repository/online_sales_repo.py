from sqlite3 import Connection
from typing import Iterable

_COLS = "id, place_id, platform_name, url, description, created_at"


def list_by_place(conn: Connection, place_id: int):
    return conn.execute(
        f"SELECT {_COLS} FROM online_sales_links WHERE place_id = ? ORDER BY platform_name ASC, id ASC",
        (place_id,),
    ).fetchall()


def get_one(conn: Connection, link_id: int):
    return conn.execute(f"SELECT {_COLS} FROM online_sales_links WHERE id = ?", (int(link_id),)).fetchone()


def insert_link(conn: Connection, place_id: int, platform_name: str, url: str, description=None) -> int:
    cur = conn.execute(
        "INSERT INTO online_sales_links(place_id, platform_name, url, description) VALUES(?, ?, ?, ?)",
        (int(place_id), platform_name, url, description),
    )
    return cur.lastrowid


def update_link(conn: Connection, link_id: int, fields: dict) -> bool:
    """Update only the provided fields (platform_name / url / description)."""
    cols = [k for k in ("platform_name", "url", "description") if k in fields]
    if not cols:
        return False
    sets = ", ".join(f"{c} = ?" for c in cols)
    params = [fields[c] for c in cols] + [int(link_id)]
    cur = conn.execute(f"UPDATE online_sales_links SET {sets} WHERE id = ?", params)
    return cur.rowcount > 0


def delete_link(conn: Connection, link_id: int) -> bool:
    cur = conn.execute("DELETE FROM online_sales_links WHERE id = ?", (int(link_id),))
    return cur.rowcount > 0


def delete_for_place(conn: Connection, place_id: int):
    conn.execute("DELETE FROM online_sales_links WHERE place_id = ?", (int(place_id),))


def bulk_insert(conn: Connection, links: Iterable[dict]):
    conn.executemany(
        "INSERT INTO online_sales_links(place_id, platform_name, url, description) VALUES(?, ?, ?, ?)",
        [(int(l["place_id"]), l["platform_name"], l["url"], l.get("description")) for l in links],
    )
