from antiques_trail.db import get_conn


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "edinburgh-antiques-trail"


def test_migrate_endpoint_is_noop_on_current_schema(client):
    res = client.post("/api/migrate")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["applied"] == []
    assert body["version"] == 7


def test_unknown_route_error_body(client):
    r = client.get("/api/place-types/999")
    assert r.status_code == 404
    assert r.json() == {"error": "Place type not found"}


def test_connection_enforces_foreign_keys(tmp_db_path):
    with get_conn() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
