from sqlite3 import Connection
from typing import Optional


def insert_request(conn: Connection, place_id: int, request_text: str) -> int:
    cur = conn.execute(
        "INSERT INTO specialty_requests(place_id, request_text) VALUES(?, ?)",
        (int(place_id), request_text),
    )
    return cur.lastrowid


def list_requests(conn: Connection, place_id: Optional[int] = None, status: Optional[str] = "pending"):
    sql = "SELECT id, place_id, request_text, status, created_at FROM specialty_requests WHERE 1=1"
    params: list = []
    if place_id is not None:
        sql += " AND place_id = ?"
        params.append(int(place_id))
    if status and status != "all":
        sql += " AND status = ?"
        params.append(status)
    sql += " ORDER BY created_at DESC, id DESC"
    return conn.execute(sql, params).fetchall()
