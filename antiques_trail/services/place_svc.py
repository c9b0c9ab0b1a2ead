from __future__ import annotations

# antiques_trail/services/place_svc.py
import logging
from typing import Any, Optional

from ..db import get_conn, transaction
from ..errors import NotFoundError, ValidationError
from ..logs import LogContext
from ..repository import online_sales_repo, place_repo, specialty_repo
from . import specialty_svc
from .online_sales_svc import format_url

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "address", "lat", "lng", "type_id")
PRICE_RANGES = ("£", "££", "£££", "££££")


def format_website_url(url: Optional[str]) -> Optional[str]:
    """Website with an https:// prefix, or None when blank."""
    if url is None or not str(url).strip():
        return None
    return format_url(str(url))


def parse_id_list(value: Optional[str]) -> list[int]:
    """'1, 2,x,3' -> [1, 2, 3]; non-numeric parts are ignored."""
    if not value:
        return []
    out: list[int] = []
    for part in str(value).split(","):
        part = part.strip()
        if part.isdigit():
            out.append(int(part))
    return out


def _specialty_filter(conn, specialty_ids: list[int]) -> Optional[dict]:
    if not specialty_ids:
        return None
    rows = specialty_repo.list_by_ids(conn, specialty_ids)
    main_ids = [r["id"] for r in rows if r["parent_id"] is None]
    subs = [r for r in rows if r["parent_id"] is not None]
    return {
        "main_ids": main_ids,
        "sub_ids": [r["id"] for r in subs],
        "sub_names": [r["name"] for r in subs],
    }


def list_places(
    type_id: Optional[int] = None,
    price_range: Optional[str] = None,
    search: Optional[str] = None,
    specialty_ids: Optional[list[int]] = None,
) -> list[dict]:
    with get_conn() as conn:
        spec_filter = _specialty_filter(conn, specialty_ids or [])
        if specialty_ids and not spec_filter["main_ids"] and not spec_filter["sub_ids"]:
            # only unknown ids were given
            return []
        rows = place_repo.list_places(
            conn,
            type_id=type_id,
            price_range=price_range or None,
            search=(search or "").strip() or None,
            specialty_filter=spec_filter,
        )
        return [dict(r) for r in rows]


def get_place_detail(place_id: int) -> Optional[dict]:
    """
    Place row plus its type name, linked specialties and online sales links.
    Returns None when the place does not exist.
    """
    with get_conn() as conn:
        row = place_repo.get_one(conn, place_id)
        if row is None:
            return None
        place = dict(row)
        specialties = [dict(r) for r in specialty_repo.list_by_place(conn, place_id)]
        links = [dict(r) for r in online_sales_repo.list_by_place(conn, place_id)]
    place["specialty_ids"] = [s["id"] for s in specialties]
    place["specialty_names"] = [s["name"] for s in specialties]
    place["online_sales_links"] = links
    return place


def _normalise(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k in place_repo.PLACE_COLUMNS:
        if k not in data:
            continue
        v = data[k]
        if isinstance(v, str):
            v = v.strip()
        out[k] = v
    if "website" in out:
        out["website"] = format_website_url(out["website"])
    for k in ("lat", "lng"):
        if out.get(k) is not None and out[k] != "":
            try:
                out[k] = float(out[k])
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid {k}: {out[k]}")
    if out.get("type_id") not in (None, ""):
        try:
            out["type_id"] = int(out["type_id"])
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid type_id: {out['type_id']}")
    if out.get("price_range") and out["price_range"] not in PRICE_RANGES:
        raise ValidationError(f"Invalid price_range: {out['price_range']}")
    for k in ("has_disabled_access", "has_toilet_facilities"):
        if k in out and out[k] is not None:
            out[k] = 1 if out[k] else 0
    return out


def _missing(data: dict[str, Any]) -> list[str]:
    return [k for k in REQUIRED_FIELDS if data.get(k) in (None, "")]


def create_place(data: dict[str, Any], log: LogContext) -> dict:
    place = _normalise(data)
    missing = _missing(place)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if not place.get("address_city"):
        place["address_city"] = "Edinburgh"

    specialty_ids = data.get("specialty_ids")
    with get_conn() as conn:
        with transaction(conn):
            new_id = place_repo.insert_place(conn, place)
            if specialty_ids is not None:
                specialty_svc.write_place_specialties(conn, new_id, specialty_ids)
            elif place.get("specialties"):
                specialty_svc.link_specialties_by_name(conn, new_id, place["specialties"])
        after = dict(place_repo.get_one(conn, new_id))
    log.set_entity("PLACE", new_id)
    log.set_after(after)
    logger.info("Created place %s (%s)", new_id, after["name"])
    return after


def update_place(place_id: int, data: dict[str, Any], log: LogContext) -> dict:
    """
    Partial update: fields absent from `data` keep their stored values.

    specialty_ids, when present, replaces the linked specialties (and the text
    mirror); otherwise a changed `specialties` text is synced to the join table.
    """
    fields = _normalise(data)
    with get_conn() as conn:
        before = place_repo.get_one(conn, place_id)
        if before is None:
            raise NotFoundError("Place not found")
        merged = {k: before[k] for k in place_repo.PLACE_COLUMNS if k in before.keys()}
        merged.update(fields)
        missing = _missing(merged)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        specialty_ids = data.get("specialty_ids")
        with transaction(conn):
            place_repo.update_place(conn, place_id, fields)
            if specialty_ids is not None:
                specialty_svc.write_place_specialties(conn, place_id, specialty_ids)
            elif "specialties" in fields:
                specialty_svc.link_specialties_by_name(conn, place_id, fields["specialties"])
        after = dict(place_repo.get_one(conn, place_id))
    log.set_entity("PLACE", place_id)
    log.set_before(dict(before))
    log.set_after(after)
    return after


def delete_place(place_id: int, log: LogContext):
    with get_conn() as conn:
        before = place_repo.get_one(conn, place_id)
        if before is None:
            raise NotFoundError("Place not found")
        place_repo.delete_place(conn, place_id)
    log.set_entity("PLACE", place_id)
    log.set_before(dict(before))
