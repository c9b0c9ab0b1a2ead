from antiques_trail.db import get_conn
from antiques_trail.repository import place_type_repo, specialty_repo
from antiques_trail.services.seed_svc import DEFAULT_PLACE_TYPES, DEFAULT_SPECIALTIES, seed_defaults


def test_seed_defaults_is_idempotent(place_type_id):
    first = seed_defaults()
    # "Antique Shop" already existed
    assert first == {
        "created_place_types": len(DEFAULT_PLACE_TYPES) - 1,
        "created_specialties": len(DEFAULT_SPECIALTIES),
    }
    assert seed_defaults() == {"created_place_types": 0, "created_specialties": 0}
    with get_conn() as conn:
        assert place_type_repo.count_all(conn) == len(DEFAULT_PLACE_TYPES)
        assert specialty_repo.count_all(conn) == len(DEFAULT_SPECIALTIES)
        assert len(specialty_repo.list_by_type(conn, place_type_id)) == len(DEFAULT_SPECIALTIES)


def test_admin_stats(client, make_place):
    make_place("A", price_range="££")
    make_place("B", price_range="£")
    make_place("C", price_range="££")
    stats = client.get("/api/admin/stats").json()
    assert stats["totalPlaces"] == 3
    assert stats["totalPlaceTypes"] == 1
    assert stats["placeCountsByType"] == [{"type": "Antique Shop", "count": 3}]
    assert stats["placeCountsByPriceRange"] == [
        {"priceRange": "£", "count": 1},
        {"priceRange": "££", "count": 2},
    ]
