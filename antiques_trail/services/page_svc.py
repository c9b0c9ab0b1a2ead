"""
Page view models.

Each builder gathers everything one screen needs in a single call, reading
through the service layer directly rather than over HTTP. The frontend renders
the returned dicts as-is.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from ..db import get_conn
from ..errors import NotFoundError
from ..repository import place_repo, place_type_repo
from . import online_sales_svc, place_svc, place_type_svc, specialty_svc
from .place_svc import PRICE_RANGES

logger = logging.getLogger(__name__)

EMPTY_PLACE = {
    "id": None,
    "name": "",
    "address": "",
    "address_street": "",
    "address_area": "",
    "address_city": "Edinburgh",
    "address_postcode": "",
    "phone": "",
    "second_phone": "",
    "email": "",
    "website": "",
    "description": "",
    "specialties": "",
    "opening_hours": "",
    "lat": None,
    "lng": None,
    "type_id": None,
    "price_range": "",
    "has_disabled_access": 0,
    "has_toilet_facilities": 0,
    "trade_associations": "",
    "facebook_url": "",
    "instagram_url": "",
    "pinterest_url": "",
    "twitter_url": "",
    "youtube_url": "",
    "snapchat_url": "",
    "tiktok_url": "",
}


def _decorate_links(links: list[dict]) -> list[dict]:
    return [
        dict(
            l,
            icon=online_sales_svc.platform_icon_class(l["platform_name"]),
            domain=online_sales_svc.extract_domain(l["url"]),
        )
        for l in links
    ]


def places_page(
    type_id: Optional[int] = None,
    price_range: Optional[str] = None,
    search: Optional[str] = None,
    specialty_ids: Optional[list[int]] = None,
) -> dict:
    """Public browse page: filtered places plus the data for the filter widgets.

    A storage failure while listing degrades to an empty list so the page still renders.
    """
    try:
        places = place_svc.list_places(type_id, price_range, search, specialty_ids)
    except sqlite3.Error:
        logger.exception("Failed to list places for page")
        places = []
    return {
        "places": places,
        "placeTypes": place_type_svc.list_place_types(),
        "specialties": specialty_svc.get_specialty_hierarchy(),
        "specialtyCounts": specialty_svc.get_specialty_counts(),
        "priceRanges": list(PRICE_RANGES),
        "filters": {
            "type_id": type_id,
            "price_range": price_range,
            "search": search,
            "specialties": specialty_ids or [],
        },
    }


def place_detail_page(place_id: int) -> dict:
    place = place_svc.get_place_detail(place_id)
    if place is None:
        raise NotFoundError("Place not found")
    links = _decorate_links(place.pop("online_sales_links"))
    return {
        "place": place,
        "specialties": specialty_svc.formatted_specialties_for_place(place_id),
        "onlineSalesLinks": links,
    }


def admin_places_page(search: Optional[str] = None, type_id: Optional[int] = None) -> dict:
    places = place_svc.list_places(type_id=type_id, search=search)
    return {
        "places": places,
        "total": len(places),
        "placeTypes": place_type_svc.list_place_types(),
        "filters": {"search": search, "type_id": type_id},
    }


def place_form_page(place_id: Optional[int] = None) -> dict:
    """Admin new/edit place form. Without place_id the form starts blank."""
    if place_id is None:
        place = dict(EMPTY_PLACE)
        links: list[dict] = []
        selected: list[int] = []
    else:
        detail = place_svc.get_place_detail(place_id)
        if detail is None:
            raise NotFoundError("Place not found")
        links = detail.pop("online_sales_links")
        selected = detail["specialty_ids"]
        place = detail
    return {
        "mode": "new" if place_id is None else "edit",
        "place": place,
        "selectedSpecialtyIds": selected,
        "onlineSalesLinks": links,
        "placeTypes": place_type_svc.list_place_types(),
        "specialties": specialty_svc.get_specialty_hierarchy(),
        "priceRanges": list(PRICE_RANGES),
        "commonPlatforms": list(online_sales_svc.COMMON_PLATFORMS),
    }


def place_types_page() -> dict:
    with get_conn() as conn:
        types = [
            dict(dict(r), place_count=place_type_repo.count_places(conn, r["id"]))
            for r in place_type_repo.list_types(conn)
        ]
    return {"placeTypes": types}


def place_type_edit_page(type_id: int) -> dict:
    with get_conn() as conn:
        row = place_type_repo.get_type(conn, type_id)
        if row is None:
            raise NotFoundError("Place type not found")
        places = [
            {"id": r["id"], "name": r["name"], "address": r["address"]}
            for r in place_repo.list_by_type(conn, type_id)
        ]
    return {
        "placeType": dict(row),
        "placeCount": len(places),
        "places": places,
        "canDelete": not places,
        "specialties": specialty_svc.list_specialties(type_id=type_id),
    }
