import pytest

from antiques_trail.db import get_conn
from antiques_trail.errors import NotFoundError
from antiques_trail.repository import place_repo, specialty_repo
from antiques_trail.services.specialty_svc import build_hierarchy, split_specialty_text, sync_specialties_from_text


def _tree():
    with get_conn() as conn:
        art = specialty_repo.insert_specialty(conn, "Art")
        furniture = specialty_repo.insert_specialty(conn, "Furniture")
        chairs = specialty_repo.insert_specialty(conn, "Chairs", parent_id=furniture)
        prints = specialty_repo.insert_specialty(conn, "Prints", parent_id=art)
    return {"art": art, "furniture": furniture, "chairs": chairs, "prints": prints}


def test_build_hierarchy_drops_orphans():
    flat = [
        {"id": 1, "name": "Art", "parent_id": None},
        {"id": 2, "name": "Prints", "parent_id": 1},
        {"id": 3, "name": "Orphan", "parent_id": 42},
    ]
    tree = build_hierarchy(flat)
    assert [t["name"] for t in tree] == ["Art"]
    assert [s["name"] for s in tree[0]["subcategories"]] == ["Prints"]


def test_split_specialty_text():
    assert split_specialty_text(" Clocks , Silver,,") == ["Clocks", "Silver"]
    assert split_specialty_text(None) == []


def test_list_variants(client):
    ids = _tree()
    all_names = [s["name"] for s in client.get("/api/specialties").json()]
    assert all_names == ["Art", "Chairs", "Furniture", "Prints"]

    main = client.get("/api/specialties", params={"main_only": "true"}).json()
    assert [s["name"] for s in main] == ["Art", "Furniture"]

    children = client.get("/api/specialties", params={"parent_id": ids["furniture"]}).json()
    assert [s["name"] for s in children] == ["Chairs"]

    by_ids = client.get("/api/specialties", params={"ids": f"{ids['prints']},{ids['art']}"}).json()
    assert [s["name"] for s in by_ids] == ["Art", "Prints"]

    by_name = client.get("/api/specialties", params=[("name", "chairs"), ("name", "ART")]).json()
    assert [s["name"] for s in by_name] == ["Art", "Chairs"]

    tree = client.get("/api/specialties", params={"hierarchical": "true"}).json()
    assert [(t["name"], [s["name"] for s in t["subcategories"]]) for t in tree] == [
        ("Art", ["Prints"]),
        ("Furniture", ["Chairs"]),
    ]

    assert client.get("/api/specialties", params={"ids": "x,y"}).status_code == 400


def test_save_specialties_for_place(client, make_place):
    ids = _tree()
    pid = make_place()
    r = client.post(f"/api/specialties?place_id={pid}", json=[ids["chairs"], ids["art"], ids["chairs"]])
    assert r.status_code == 200
    assert r.json()["specialties"] == "Art, Chairs"
    with get_conn() as conn:
        assert place_repo.get_one(conn, pid)["specialties"] == "Art, Chairs"
        assert sorted(specialty_repo.place_specialty_ids(conn, pid)) == sorted([ids["chairs"], ids["art"]])

    formatted = client.get("/api/place-specialties", params={"place_id": pid}).json()
    assert [s["name"] for s in formatted["mainCategories"]] == ["Art"]
    assert [s["name"] for s in formatted["subcategories"]] == ["Chairs"]

    tree = client.get("/api/specialties", params={"place_id": pid, "hierarchical": "true"}).json()
    assert [(t["name"], [s["name"] for s in t["subcategories"]]) for t in tree] == [
        ("Art", []),
        ("Furniture", ["Chairs"]),
    ]

    r = client.post(f"/api/specialties?place_id={pid}", json=[])
    assert r.json()["specialties"] == ""


def test_save_specialties_errors(client, make_place):
    assert client.post("/api/specialties", json=[1]).status_code == 400
    assert client.post("/api/specialties?place_id=999", json=[]).status_code == 404
    pid = make_place()
    r = client.post(f"/api/specialties?place_id={pid}", json=[12345])
    assert r.status_code == 400
    assert client.get("/api/place-specialties").status_code == 400


def test_specialty_crud(client):
    r = client.post("/api/specialties/create", json={"name": "Clocks & Watches"})
    assert r.status_code == 201
    parent = r.json()["id"]
    r = client.post("/api/specialties/create", json={"name": "Longcase Clocks", "parent_id": parent})
    child = r.json()["id"]
    assert r.json()["parent_id"] == parent

    assert client.post("/api/specialties/create", json={"name": "X", "parent_id": 999}).status_code == 400
    assert client.post("/api/specialties/update", json={"id": parent, "parent_id": parent}).status_code == 400
    assert client.post("/api/specialties/update", json={"id": 999, "name": "Y"}).status_code == 404

    r = client.post("/api/specialties/update", json={"id": child, "description": "Grandfather clocks"})
    assert r.status_code == 200
    assert r.json()["description"] == "Grandfather clocks"
    assert r.json()["name"] == "Longcase Clocks"

    r = client.post("/api/specialties/delete", json={"id": parent})
    assert r.status_code == 200
    with get_conn() as conn:
        assert specialty_repo.get_one(conn, child)["parent_id"] is None
    assert client.post("/api/specialties/delete", json={"id": parent}).status_code == 404


def test_list_by_type(client, place_type_id):
    ids = _tree()
    with get_conn() as conn:
        specialty_repo.link_type(conn, place_type_id, ids["art"])
    r = client.get("/api/specialties", params={"type_id": place_type_id})
    assert [s["name"] for s in r.json()] == ["Art"]


def test_sync_from_text_reuses_names_case_insensitively(make_place):
    ids = _tree()
    pid = make_place()
    linked = sync_specialties_from_text(pid, "art, Lighting, ART")
    with get_conn() as conn:
        lighting = specialty_repo.find_by_name(conn, "lighting")["id"]
    assert linked == [ids["art"], lighting]

    with pytest.raises(NotFoundError):
        sync_specialties_from_text(999, "Art")


def test_update_rejects_indirect_parent_cycle(client):
    ids = _tree()
    r = client.post("/api/specialties/update", json={"id": ids["art"], "parent_id": ids["prints"]})
    assert r.status_code == 400
    assert "subcategories" in r.json()["error"]

    with get_conn() as conn:
        assert specialty_repo.get_one(conn, ids["art"])["parent_id"] is None
    tree = client.get("/api/specialties", params={"hierarchical": "true"}).json()
    assert [t["name"] for t in tree] == ["Art", "Furniture"]

    # moving a leaf under another branch is still allowed
    r = client.post("/api/specialties/update", json={"id": ids["prints"], "parent_id": ids["furniture"]})
    assert r.status_code == 200
    assert r.json()["parent_id"] == ids["furniture"]


def test_delete_specialty_updates_place_text(client, make_place):
    ids = _tree()
    pid = make_place()
    other = make_place("Stockbridge Antiques")
    client.post(f"/api/specialties?place_id={pid}", json=[ids["art"], ids["chairs"]])
    client.post(f"/api/specialties?place_id={other}", json=[ids["chairs"]])

    r = client.post("/api/specialties/delete", json={"id": ids["art"]})
    assert r.status_code == 200
    with get_conn() as conn:
        assert place_repo.get_one(conn, pid)["specialties"] == "Chairs"
        assert place_repo.get_one(conn, other)["specialties"] == "Chairs"
        assert specialty_repo.place_specialty_ids(conn, pid) == [ids["chairs"]]
