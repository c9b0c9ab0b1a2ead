import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "antiques_test.db"
    # Point the app to this temp DB
    os.environ["ANTIQUES_DB_PATH"] = str(path)
    os.environ["APP_ENV"] = "test"
    from antiques_trail.db import get_conn
    from antiques_trail.migrations import apply_migrations
    with get_conn(str(path)) as conn:
        apply_migrations(conn)
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    # Import app after DB ready so startup hooks can use it
    from antiques_trail.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("ANTIQUES_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = [
        "specialty_searches",
        "specialty_requests",
        "online_sales_links",
        "place_specialties",
        "place_type_specialties",
        "places",
        "specialties",
        "place_types",
    ]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        # restart AUTOINCREMENT ids so tests can rely on id=1
        conn.execute("DELETE FROM sqlite_sequence")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def place_type_id():
    from antiques_trail.db import get_conn
    from antiques_trail.repository import place_type_repo
    with get_conn() as conn:
        return place_type_repo.insert_type(conn, "Antique Shop", "Antiques")


@pytest.fixture()
def make_place(place_type_id):
    from antiques_trail.db import get_conn
    from antiques_trail.repository import place_repo

    def _make(name="Georgian Antiques", **kw):
        data = {
            "name": name,
            "address": "10 Randolph Place, Edinburgh",
            "lat": 55.9521,
            "lng": -3.2102,
            "type_id": place_type_id,
        }
        data.update(kw)
        with get_conn() as conn:
            return place_repo.insert_place(conn, data)

    return _make
