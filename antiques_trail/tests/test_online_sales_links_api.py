import sqlite3
from unittest.mock import patch

from antiques_trail.db import get_conn
from antiques_trail.repository import online_sales_repo


def test_missing_place_id_returns_400(client):
    r = client.get("/api/online-sales-links")
    assert r.status_code == 400
    assert r.json() == {"error": "Place ID is required"}


def test_non_integer_place_id_returns_400(client):
    r = client.get("/api/online-sales-links", params={"placeId": "abc"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_unknown_place_returns_empty_array(client):
    r = client.get("/api/online-sales-links", params={"placeId": 12345})
    assert r.status_code == 200
    assert r.json() == []


def test_links_ordered_by_platform(client, make_place):
    pid = make_place()
    with get_conn() as conn:
        online_sales_repo.insert_link(conn, pid, "Vinted", "https://vinted.co.uk/member/georgian", "Main store")
        online_sales_repo.insert_link(conn, pid, "Etsy", "https://etsy.com/shop/georgian")
        online_sales_repo.insert_link(conn, pid, "Amazon", "https://amazon.co.uk/georgian")

    r = client.get("/api/online-sales-links", params={"placeId": pid})
    assert r.status_code == 200
    rows = r.json()
    assert [x["platform_name"] for x in rows] == ["Amazon", "Etsy", "Vinted"]
    assert set(rows[0].keys()) >= {"id", "place_id", "platform_name", "url", "description", "created_at"}
    assert all(x["place_id"] == pid for x in rows)


def test_storage_failure_returns_500(client):
    with patch(
        "antiques_trail.routes.online_sales.get_online_sales_links_by_place_id",
        side_effect=sqlite3.OperationalError("disk I/O error"),
    ):
        r = client.get("/api/online-sales-links", params={"placeId": 1})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch online sales links"}


def test_create_update_delete_link(client, make_place):
    pid = make_place()
    r = client.post("/api/online-sales-links", json={
        "place_id": pid, "platform_name": "Etsy", "url": "etsy.com/shop/georgian",
    })
    assert r.status_code == 201
    link = r.json()
    assert link["url"] == "https://etsy.com/shop/georgian"

    r = client.put(f"/api/online-sales-links/{link['id']}", json={"description": "Prints and maps"})
    assert r.status_code == 200
    assert r.json()["description"] == "Prints and maps"
    assert r.json()["platform_name"] == "Etsy"

    r = client.delete(f"/api/online-sales-links/{link['id']}")
    assert r.status_code == 200
    assert client.get("/api/online-sales-links", params={"placeId": pid}).json() == []

    r = client.delete(f"/api/online-sales-links/{link['id']}")
    assert r.status_code == 404


def test_create_link_validation(client, make_place):
    pid = make_place()
    r = client.post("/api/online-sales-links", json={"place_id": pid, "platform_name": "Etsy", "url": "  "})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields: url"

    r = client.post("/api/online-sales-links", json={"place_id": 999, "platform_name": "Etsy", "url": "etsy.com"})
    assert r.status_code == 404


def test_links_removed_with_place(client, make_place):
    pid = make_place()
    with get_conn() as conn:
        online_sales_repo.insert_link(conn, pid, "eBay", "https://ebay.co.uk/str/x")
    assert client.delete("/api/places", params={"id": pid}).status_code == 200
    with get_conn() as conn:
        assert online_sales_repo.list_by_place(conn, pid) == []


def test_update_link_rejects_blank_required_fields(client, make_place):
    pid = make_place()
    with get_conn() as conn:
        link_id = online_sales_repo.insert_link(conn, pid, "Etsy", "https://etsy.com/shop/georgian")

    r = client.put(f"/api/online-sales-links/{link_id}", json={"platform_name": None})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields: platform_name"

    r = client.put(f"/api/online-sales-links/{link_id}", json={"url": "  "})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields: url"

    with get_conn() as conn:
        row = online_sales_repo.get_one(conn, link_id)
    assert (row["platform_name"], row["url"]) == ("Etsy", "https://etsy.com/shop/georgian")
