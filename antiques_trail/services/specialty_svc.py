from __future__ import annotations

# antiques_trail/services/specialty_svc.py
import logging
from sqlite3 import Connection
from typing import Any, Iterable, Optional

from ..db import get_conn, transaction
from ..errors import NotFoundError, ValidationError
from ..logs import LogContext
from ..repository import place_repo, specialty_repo

logger = logging.getLogger(__name__)


def build_hierarchy(specialties: Iterable[dict]) -> list[dict]:
    """Nest a flat specialty list: roots in input order, each with `subcategories`.

    Children whose parent is not in the list are dropped.
    """
    items = [dict(s, subcategories=[]) for s in specialties]
    by_id = {s["id"]: s for s in items}
    roots: list[dict] = []
    for s in items:
        if s.get("parent_id") is None:
            roots.append(s)
        else:
            parent = by_id.get(s["parent_id"])
            if parent is not None:
                parent["subcategories"].append(s)
    return roots


def get_specialty_counts() -> list[dict]:
    with get_conn() as conn:
        return [dict(r) for r in specialty_repo.specialty_counts(conn)]


def list_specialties(
    *,
    type_id: Optional[int] = None,
    place_id: Optional[int] = None,
    parent_id: Optional[int] = None,
    ids: Optional[list[int]] = None,
    names: Optional[list[str]] = None,
    main_only: bool = False,
    hierarchical: bool = False,
) -> list[dict]:
    """Specialty listing; the first matching selector wins, in the order of the parameters."""
    with get_conn() as conn:
        if place_id is not None:
            if hierarchical:
                rows = specialty_repo.list_with_parents_for_place(conn, place_id)
                return build_hierarchy(dict(r) for r in rows)
            rows = specialty_repo.list_by_place(conn, place_id)
            return sorted((dict(r) for r in rows), key=lambda s: s["name"])
        if type_id is not None:
            return [dict(r) for r in specialty_repo.list_by_type(conn, type_id)]
        if main_only:
            return [dict(r) for r in specialty_repo.list_main(conn)]
        if ids is not None:
            return [dict(r) for r in specialty_repo.list_by_ids(conn, ids)]
        if parent_id is not None:
            return [dict(r) for r in specialty_repo.list_children(conn, parent_id)]
        if hierarchical:
            return build_hierarchy(dict(r) for r in specialty_repo.list_all(conn))
        if names:
            return [dict(r) for r in specialty_repo.list_by_names(conn, names)]
        return [dict(r) for r in specialty_repo.list_all(conn)]


def get_specialty_hierarchy() -> list[dict]:
    return list_specialties(hierarchical=True)


def formatted_specialties_for_place(place_id: int) -> dict[str, list[dict]]:
    with get_conn() as conn:
        rows = [dict(r) for r in specialty_repo.list_by_place(conn, place_id)]
    return {
        "mainCategories": [s for s in rows if s["parent_id"] is None],
        "subcategories": sorted((s for s in rows if s["parent_id"] is not None), key=lambda s: s["name"]),
    }


def write_place_specialties(conn: Connection, place_id: int, specialty_ids: list[int]) -> str:
    """Replace links and text mirror on an open connection; the caller owns the transaction."""
    specialty_ids = list(dict.fromkeys(int(i) for i in specialty_ids))
    specialty_repo.replace_place_specialties(conn, place_id, specialty_ids)
    names = [r["name"] for r in specialty_repo.list_by_ids(conn, specialty_ids)]
    text = ", ".join(names)
    place_repo.set_specialties_text(conn, place_id, text)
    return text


def save_specialties_for_place(place_id: int, specialty_ids: list[int]) -> str:
    """Replace the place's specialties and mirror their names into places.specialties.

    Returns the new text value. Runs in one transaction; an unknown specialty id
    rolls everything back.
    """
    ids = list(dict.fromkeys(int(i) for i in specialty_ids))
    with get_conn() as conn:
        if not place_repo.exists(conn, place_id):
            raise NotFoundError("Place not found")
        with transaction(conn):
            text = write_place_specialties(conn, place_id, ids)
    logger.info("Saved %d specialties for place %s", len(ids), place_id)
    return text


def split_specialty_text(text: Optional[str]) -> list[str]:
    if not text:
        return []
    return [s.strip() for s in text.split(",") if s.strip()]


def link_specialties_by_name(conn: Connection, place_id: int, specialties_text: Optional[str]) -> list[int]:
    ids: list[int] = []
    for name in split_specialty_text(specialties_text):
        row = specialty_repo.find_by_name(conn, name)
        sid = row["id"] if row else specialty_repo.insert_specialty(conn, name)
        if sid not in ids:
            ids.append(sid)
    specialty_repo.replace_place_specialties(conn, place_id, ids)
    return ids


def sync_specialties_from_text(place_id: int, specialties_text: Optional[str]) -> list[int]:
    """Find or create a specialty per comma-separated name and link them to the place."""
    with get_conn() as conn:
        if not place_repo.exists(conn, place_id):
            raise NotFoundError("Place not found")
        with transaction(conn):
            ids = link_specialties_by_name(conn, place_id, specialties_text)
    logger.info("Linked %d specialties to place %s from text", len(ids), place_id)
    return ids


def _check_parent(conn: Connection, parent_id: Optional[int], self_id: Optional[int] = None):
    if parent_id is None:
        return
    if self_id is not None and int(parent_id) == int(self_id):
        raise ValidationError("A specialty cannot be its own parent")
    row = specialty_repo.get_one(conn, parent_id)
    if row is None:
        raise ValidationError("Parent specialty not found")
    if self_id is None:
        return
    # walk up from the new parent; reaching self_id would close a cycle
    seen = {int(parent_id)}
    while row is not None and row["parent_id"] is not None:
        ancestor = int(row["parent_id"])
        if ancestor == int(self_id):
            raise ValidationError("A specialty cannot be placed under one of its own subcategories")
        if ancestor in seen:
            break
        seen.add(ancestor)
        row = specialty_repo.get_one(conn, ancestor)


def create_specialty(name: str, description: Optional[str], parent_id: Optional[int], log: LogContext) -> dict:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    with get_conn() as conn:
        _check_parent(conn, parent_id)
        new_id = specialty_repo.insert_specialty(conn, name, description, parent_id)
        after = dict(specialty_repo.get_one(conn, new_id))
    log.set_entity("SPECIALTY", new_id)
    log.set_after(after)
    return after


def update_specialty(specialty_id: int, fields: dict[str, Any], log: LogContext) -> dict:
    if "name" in fields:
        fields["name"] = (fields["name"] or "").strip()
        if not fields["name"]:
            raise ValidationError("Name is required")
    with get_conn() as conn:
        before = specialty_repo.get_one(conn, specialty_id)
        if before is None:
            raise NotFoundError("Specialty not found")
        if "parent_id" in fields:
            _check_parent(conn, fields["parent_id"], specialty_id)
        specialty_repo.update_specialty(conn, specialty_id, fields)
        after = dict(specialty_repo.get_one(conn, specialty_id))
    log.set_entity("SPECIALTY", specialty_id)
    log.set_before(dict(before))
    log.set_after(after)
    return after


def delete_specialty(specialty_id: int, log: LogContext):
    """Delete a specialty; its subcategories become main categories.

    The name is also removed from the specialties text of every place linked to it.
    """
    with get_conn() as conn:
        before = specialty_repo.get_one(conn, specialty_id)
        if before is None:
            raise NotFoundError("Specialty not found")
        name = before["name"].lower()
        with transaction(conn):
            for place_id in specialty_repo.place_ids_for_specialty(conn, specialty_id):
                place = place_repo.get_one(conn, place_id)
                kept = [s for s in split_specialty_text(place["specialties"]) if s.lower() != name]
                place_repo.set_specialties_text(conn, place_id, ", ".join(kept))
            specialty_repo.detach_children(conn, specialty_id)
            specialty_repo.delete_specialty(conn, specialty_id)
    log.set_entity("SPECIALTY", specialty_id)
    log.set_before(dict(before))
