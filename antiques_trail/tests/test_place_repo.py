import sqlite3

import pytest

from antiques_trail.db import get_conn, transaction
from antiques_trail.repository import place_repo, specialty_repo


def _place(type_id, **kw):
    data = {"name": "Armchair Books", "address": "72 West Port", "lat": 55.946, "lng": -3.197, "type_id": type_id}
    data.update(kw)
    return data


def test_insert_with_unknown_type_violates_foreign_key(place_type_id):
    with get_conn() as conn:
        with pytest.raises(sqlite3.IntegrityError):
            place_repo.insert_place(conn, _place(place_type_id + 100))
        assert place_repo.count_all(conn) == 0


def test_get_one_includes_type_name(place_type_id):
    with get_conn() as conn:
        pid = place_repo.insert_place(conn, _place(place_type_id))
        row = place_repo.get_one(conn, pid)
    assert row["type_name"] == "Antique Shop"
    assert row["address_city"] == "Edinburgh"


def test_update_and_delete(place_type_id):
    with get_conn() as conn:
        pid = place_repo.insert_place(conn, _place(place_type_id))
        assert place_repo.update_place(conn, pid, {"phone": "0131 229 5927", "unknown": "x"}) is True
        assert place_repo.get_one(conn, pid)["phone"] == "0131 229 5927"
        assert place_repo.update_place(conn, pid, {}) is False
        assert place_repo.delete_place(conn, pid) is True
        assert place_repo.delete_place(conn, pid) is False


def test_search_matches_linked_specialty_names(place_type_id):
    with get_conn() as conn:
        p1 = place_repo.insert_place(conn, _place(place_type_id, name="Armchair Books"))
        place_repo.insert_place(conn, _place(place_type_id, name="Unicorn Antiques", description="Lamps and brass"))
        sid = specialty_repo.insert_specialty(conn, "Books & Maps")
        with transaction(conn):
            specialty_repo.replace_place_specialties(conn, p1, [sid])

        assert [r["name"] for r in place_repo.list_places(conn, search="maps")] == ["Armchair Books"]
        assert [r["name"] for r in place_repo.list_places(conn, search="BRASS")] == ["Unicorn Antiques"]
        assert len(place_repo.list_places(conn)) == 2


def test_specialty_filter_semantics(place_type_id):
    with get_conn() as conn:
        furniture = specialty_repo.insert_specialty(conn, "Furniture")
        chairs = specialty_repo.insert_specialty(conn, "Chairs", parent_id=furniture)
        tables = specialty_repo.insert_specialty(conn, "Tables", parent_id=furniture)
        a = place_repo.insert_place(conn, _place(place_type_id, name="A"))
        b = place_repo.insert_place(conn, _place(place_type_id, name="B"))
        place_repo.insert_place(conn, _place(place_type_id, name="C", specialties="Old chairs, Lamps"))
        place_repo.insert_place(conn, _place(place_type_id, name="D"))
        with transaction(conn):
            specialty_repo.replace_place_specialties(conn, a, [furniture])
            specialty_repo.replace_place_specialties(conn, b, [tables])

        def names(flt):
            return [r["name"] for r in place_repo.list_places(conn, specialty_filter=flt)]

        # main category reaches places linked to its children
        assert names({"main_ids": [furniture]}) == ["A", "B"]
        # subcategory also matches the legacy text field
        assert names({"sub_ids": [chairs], "sub_names": ["Chairs"]}) == ["C"]
        assert names({"sub_ids": [tables], "sub_names": ["Tables"]}) == ["B"]
        # both: only the selected subcategories count
        assert names({"main_ids": [furniture], "sub_ids": [tables], "sub_names": ["Tables"]}) == ["B"]


def test_counts_by_price_range_order(place_type_id):
    with get_conn() as conn:
        for pr in ("£££", "£", "£", None):
            place_repo.insert_place(conn, _place(place_type_id, price_range=pr))
        rows = [dict(r) for r in place_repo.counts_by_price_range(conn)]
    assert rows == [
        {"priceRange": "£", "count": 2},
        {"priceRange": "£££", "count": 1},
        {"priceRange": None, "count": 1},
    ]
