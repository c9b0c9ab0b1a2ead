from sqlite3 import Connection
from typing import Optional


def insert_search(conn: Connection, specialty_id: int, user_ip: Optional[str], session_id: Optional[str]) -> int:
    cur = conn.execute(
        "INSERT INTO specialty_searches(specialty_id, user_ip, session_id) VALUES(?, ?, ?)",
        (int(specialty_id), user_ip, session_id),
    )
    return cur.lastrowid


def top_searches(conn: Connection, days: int, limit: int):
    return conn.execute(
        """
        SELECT sp.id, sp.name, sp.parent_id, COUNT(*) AS search_count
        FROM specialty_searches ss
        JOIN specialties sp ON ss.specialty_id = sp.id
        WHERE ss.search_timestamp >= datetime('now', '-' || ? || ' days')
        GROUP BY ss.specialty_id
        ORDER BY search_count DESC, sp.name
        LIMIT ?
        """,
        (int(days), int(limit)),
    ).fetchall()


def total_searches(conn: Connection, days: int) -> int:
    row = conn.execute(
        "SELECT COUNT(*) AS total FROM specialty_searches "
        "WHERE search_timestamp >= datetime('now', '-' || ? || ' days')",
        (int(days),),
    ).fetchone()
    return int(row["total"])
