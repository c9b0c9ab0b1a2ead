from sqlite3 import Connection
from typing import Optional


def list_types(conn: Connection):
    return conn.execute(
        "SELECT id, name, description, created_at, updated_at FROM place_types ORDER BY name"
    ).fetchall()


def get_type(conn: Connection, type_id: int):
    return conn.execute(
        "SELECT id, name, description, created_at, updated_at FROM place_types WHERE id=?",
        (int(type_id),),
    ).fetchone()


def find_by_name(conn: Connection, name: str, exclude_id: Optional[int] = None):
    sql = "SELECT id, name FROM place_types WHERE LOWER(name) = LOWER(?)"
    params: list = [name]
    if exclude_id is not None:
        sql += " AND id != ?"
        params.append(int(exclude_id))
    return conn.execute(sql, params).fetchone()


def insert_type(conn: Connection, name: str, description: str = "") -> int:
    cur = conn.execute(
        "INSERT INTO place_types(name, description) VALUES(?, ?)",
        (name, description),
    )
    return cur.lastrowid


def update_type(conn: Connection, type_id: int, name: str, description: Optional[str]) -> bool:
    if description is None:
        cur = conn.execute("UPDATE place_types SET name=? WHERE id=?", (name, int(type_id)))
    else:
        cur = conn.execute(
            "UPDATE place_types SET name=?, description=? WHERE id=?",
            (name, description, int(type_id)),
        )
    return cur.rowcount > 0


def delete_type(conn: Connection, type_id: int) -> bool:
    cur = conn.execute("DELETE FROM place_types WHERE id=?", (int(type_id),))
    return cur.rowcount > 0


def count_places(conn: Connection, type_id: int) -> int:
    row = conn.execute("SELECT COUNT(*) AS cnt FROM places WHERE type_id=?", (int(type_id),)).fetchone()
    return int(row["cnt"])


def count_all(conn: Connection) -> int:
    return conn.execute("SELECT COUNT(*) AS cnt FROM place_types").fetchone()["cnt"]
