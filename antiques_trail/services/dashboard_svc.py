from __future__ import annotations

from ..db import get_conn
from ..repository import place_repo, place_type_repo


def get_dashboard_stats() -> dict:
    """Admin dashboard counters: places per type and per price range, and totals."""
    with get_conn() as conn:
        by_type = [dict(r) for r in place_repo.counts_by_type(conn)]
        by_price = [dict(r) for r in place_repo.counts_by_price_range(conn)]
        total_places = place_repo.count_all(conn)
        total_types = place_type_repo.count_all(conn)
    return {
        "placeCountsByType": by_type,
        "placeCountsByPriceRange": by_price,
        "totalPlaces": total_places,
        "totalPlaceTypes": total_types,
    }
