from __future__ import annotations

# antiques_trail/services/import_svc.py
import logging

import pandas as pd

from ..db import get_conn, transaction
from ..logs import LogContext
from ..repository import online_sales_repo, place_repo, place_type_repo
from . import specialty_svc
from .online_sales_svc import format_url
from .place_svc import PRICE_RANGES, format_website_url

logger = logging.getLogger(__name__)

DAYS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def _text(r, key: str) -> str | None:
    v = r.get(key)
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return None
    s = str(v).strip()
    return s or None


def _float(r, key: str) -> float | None:
    v = r.get(key)
    if v is None:
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return None if pd.isna(f) or f == 0 else f


def _opening_hours(r) -> str | None:
    text = _text(r, "opening_hours")
    if text:
        return text
    parts = []
    for d in DAYS:
        v = _text(r, f"opening_hours_{d}")
        if v:
            parts.append(f"{d.capitalize()}: {v}")
    return ", ".join(parts) or None


def _online_links(r) -> list[dict]:
    links = []
    i = 1
    while _text(r, f"online_sales_platform{i}"):
        url = _text(r, f"online_sales_url{i}")
        if url:
            links.append({
                "platform_name": _text(r, f"online_sales_platform{i}"),
                "url": format_url(url),
                "description": _text(r, f"online_sales_desc{i}"),
            })
        i += 1
    return links


def import_places_csv(csv_path: str, log: LogContext) -> dict:
    """Import places from a CSV file.

    Columns: name, address, postcode, phone, email, website, description,
    specialties, type_name, price_range, lat, lng; optional opening_hours or
    opening_hours_<day>, and online_sales_platformN / online_sales_urlN /
    online_sales_descN groups. Unknown place types are created. Rows without
    name/address/type_name or without coordinates are skipped; a price_range
    outside £..££££ is dropped.
    """
    df = pd.read_csv(csv_path, dtype=str)

    created_types = 0
    imported = 0
    skipped = 0
    links_created = 0

    with get_conn() as conn:
        type_map = {r["name"].lower(): r["id"] for r in place_type_repo.list_types(conn)}

        for _, r in df.iterrows():
            name = _text(r, "name")
            address = _text(r, "address")
            type_name = _text(r, "type_name")
            if not name or not address or not type_name:
                logger.warning("Skipping incomplete record: %s", name or "Unnamed")
                skipped += 1
                continue
            lat, lng = _float(r, "lat"), _float(r, "lng")
            if lat is None or lng is None:
                logger.warning("Skipping record with missing coordinates: %s", name)
                skipped += 1
                continue

            with transaction(conn):
                type_id = type_map.get(type_name.lower())
                if type_id is None:
                    type_id = place_type_repo.insert_type(conn, type_name)
                    type_map[type_name.lower()] = type_id
                    created_types += 1
                    logger.info("Created place type: %s", type_name)

                price_range = _text(r, "price_range")
                if price_range and price_range not in PRICE_RANGES:
                    logger.warning("Ignoring invalid price_range %r for %s", price_range, name)
                    price_range = None
                specialties = _text(r, "specialties")
                place_id = place_repo.insert_place(conn, {
                    "name": name,
                    "address": address,
                    "address_postcode": _text(r, "postcode"),
                    "address_city": _text(r, "city") or "Edinburgh",
                    "phone": _text(r, "phone"),
                    "email": _text(r, "email"),
                    "website": format_website_url(_text(r, "website")),
                    "description": _text(r, "description"),
                    "specialties": specialties,
                    "opening_hours": _opening_hours(r),
                    "lat": lat,
                    "lng": lng,
                    "price_range": price_range,
                    "type_id": type_id,
                })
                if specialties:
                    specialty_svc.link_specialties_by_name(conn, place_id, specialties)
                links = _online_links(r)
                if links:
                    online_sales_repo.bulk_insert(conn, [dict(l, place_id=place_id) for l in links])
                    links_created += len(links)
            imported += 1

    res = {
        "imported": imported,
        "skipped": skipped,
        "created_place_types": created_types,
        "created_online_sales_links": links_created,
    }
    log.set_payload({"csv": str(csv_path)})
    log.set_after(res)
    logger.info("Import finished: %s", res)
    return res
