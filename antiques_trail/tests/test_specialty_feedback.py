from antiques_trail.db import get_conn
from antiques_trail.repository import specialty_repo


def test_specialty_requests(client, make_place):
    pid = make_place()
    r = client.post("/api/specialty-requests", json={"placeId": pid, "requestText": "Scottish silver"})
    assert r.status_code == 200
    assert r.json()["success"] is True

    rows = client.get("/api/specialty-requests").json()
    assert [(x["place_id"], x["request_text"], x["status"]) for x in rows] == [(pid, "Scottish silver", "pending")]
    assert client.get("/api/specialty-requests", params={"status": "done"}).json() == []
    assert len(client.get("/api/specialty-requests", params={"status": "all", "place_id": pid}).json()) == 1


def test_specialty_request_validation(client):
    r = client.post("/api/specialty-requests", json={"placeId": 1})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields: placeId and requestText"
    r = client.post("/api/specialty-requests", json={"placeId": 999, "requestText": "x"})
    assert r.status_code == 404


def test_specialty_searches(client):
    with get_conn() as conn:
        clocks = specialty_repo.insert_specialty(conn, "Clocks")
        art = specialty_repo.insert_specialty(conn, "Art")
    client.cookies.set("session_id", "abc123")
    for sid in (clocks, clocks, art):
        r = client.post("/api/specialty-searches", json={"specialtyId": sid}, headers={"x-forwarded-for": "203.0.113.7"})
        assert r.status_code == 200

    stats = client.get("/api/specialty-searches").json()
    assert stats["days"] == 7
    assert stats["total_searches"] == 3
    assert [(s["name"], s["search_count"]) for s in stats["top_searches"]] == [("Clocks", 2), ("Art", 1)]

    with get_conn() as conn:
        row = conn.execute("SELECT user_ip, session_id FROM specialty_searches LIMIT 1").fetchone()
    assert row["user_ip"] == "203.0.113.7"
    assert row["session_id"] == "abc123"

    assert client.post("/api/specialty-searches", json={}).status_code == 400
