def test_place_type_crud(client):
    r = client.post("/api/place-types", json={"name": "Auction House", "description": "Auctions"})
    assert r.status_code == 201
    tid = r.json()["id"]

    r = client.get("/api/place-types")
    assert [t["name"] for t in r.json()] == ["Auction House"]

    r = client.put(f"/api/place-types/{tid}", json={"name": "Auctioneers"})
    assert r.status_code == 200
    assert r.json()["name"] == "Auctioneers"
    assert r.json()["description"] == "Auctions"

    r = client.delete(f"/api/place-types/{tid}")
    assert r.status_code == 200
    assert client.get(f"/api/place-types/{tid}").status_code == 404


def test_blank_name_rejected(client):
    r = client.post("/api/place-types", json={"name": "   "})
    assert r.status_code == 400
    assert r.json() == {"error": "Name is required"}


def test_duplicate_name_is_conflict(client):
    client.post("/api/place-types", json={"name": "Record Shop"})
    r = client.post("/api/place-types", json={"name": "record shop"})
    assert r.status_code == 409

    other = client.post("/api/place-types", json={"name": "Book Shop"}).json()
    r = client.put(f"/api/place-types/{other['id']}", json={"name": "RECORD SHOP"})
    assert r.status_code == 409
    # renaming to its own name is fine
    r = client.put(f"/api/place-types/{other['id']}", json={"name": "Book Shop", "description": "Books"})
    assert r.status_code == 200


def test_type_in_use_cannot_be_deleted(client, place_type_id, make_place):
    make_place()
    r = client.delete(f"/api/place-types/{place_type_id}")
    assert r.status_code == 409
    assert "in use" in r.json()["error"]


def test_missing_type(client):
    assert client.put("/api/place-types/404", json={"name": "X"}).status_code == 404
    assert client.delete("/api/place-types/404").status_code == 404
