from __future__ import annotations

# antiques_trail/services/feedback_svc.py
from typing import Optional

from ..db import get_conn
from ..errors import NotFoundError, ValidationError
from ..repository import place_repo, specialty_repo, specialty_request_repo, specialty_search_repo


def submit_specialty_request(place_id: int, request_text: str) -> int:
    """A visitor suggesting a specialty a place is missing."""
    text = (request_text or "").strip()
    if not place_id or not text:
        raise ValidationError("Missing required fields: placeId and requestText")
    with get_conn() as conn:
        if not place_repo.exists(conn, place_id):
            raise NotFoundError("Place not found")
        return specialty_request_repo.insert_request(conn, place_id, text)


def list_specialty_requests(place_id: Optional[int] = None, status: str = "pending") -> list[dict]:
    with get_conn() as conn:
        return [dict(r) for r in specialty_request_repo.list_requests(conn, place_id, status)]


def record_specialty_search(specialty_id: int, user_ip: Optional[str], session_id: Optional[str]) -> int:
    if not specialty_id:
        raise ValidationError("Missing required field: specialtyId")
    with get_conn() as conn:
        if specialty_repo.get_one(conn, specialty_id) is None:
            raise NotFoundError("Specialty not found")
        return specialty_search_repo.insert_search(conn, specialty_id, user_ip or "unknown", session_id)


def specialty_search_stats(days: int = 7, limit: int = 20) -> dict:
    with get_conn() as conn:
        top = [dict(r) for r in specialty_search_repo.top_searches(conn, days, limit)]
        total = specialty_search_repo.total_searches(conn, days)
    return {"top_searches": top, "total_searches": total, "days": days}
