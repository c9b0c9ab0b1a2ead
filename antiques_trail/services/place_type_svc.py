from __future__ import annotations

from typing import Optional

from ..db import get_conn
from ..errors import ConflictError, NotFoundError, ValidationError
from ..logs import LogContext
from ..repository import place_type_repo


# ===== Place type list for UI =====
def list_place_types() -> list[dict]:
    with get_conn() as conn:
        return [dict(r) for r in place_type_repo.list_types(conn)]


def get_place_type(type_id: int) -> Optional[dict]:
    with get_conn() as conn:
        row = place_type_repo.get_type(conn, type_id)
        return dict(row) if row else None


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")
    return name.strip()


def create_place_type(name: str, description: str | None, log: LogContext) -> dict:
    name = _clean_name(name)
    with get_conn() as conn:
        if place_type_repo.find_by_name(conn, name):
            raise ConflictError("A place type with this name already exists")
        new_id = place_type_repo.insert_type(conn, name, description or "")
        after = dict(place_type_repo.get_type(conn, new_id))
    log.set_entity("PLACE_TYPE", new_id)
    log.set_after(after)
    return after


def update_place_type(type_id: int, name: str, description: str | None, log: LogContext) -> dict:
    """
    Rename a place type (and optionally change its description).
    Names are unique case-insensitively.
    """
    name = _clean_name(name)
    with get_conn() as conn:
        before = place_type_repo.get_type(conn, type_id)
        if before is None:
            raise NotFoundError("Place type not found")
        if place_type_repo.find_by_name(conn, name, exclude_id=type_id):
            raise ConflictError("A place type with this name already exists")
        place_type_repo.update_type(conn, type_id, name, description)
        after = dict(place_type_repo.get_type(conn, type_id))
    log.set_entity("PLACE_TYPE", type_id)
    log.set_before(dict(before))
    log.set_after(after)
    return after


def delete_place_type(type_id: int, log: LogContext):
    with get_conn() as conn:
        before = place_type_repo.get_type(conn, type_id)
        if before is None:
            raise NotFoundError("Place type not found")
        if place_type_repo.count_places(conn, type_id) > 0:
            raise ConflictError(
                "Cannot delete a place type that is in use. Please reassign places to another type first."
            )
        place_type_repo.delete_type(conn, type_id)
    log.set_entity("PLACE_TYPE", type_id)
    log.set_before(dict(before))
