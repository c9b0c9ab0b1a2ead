from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..logs import LogContext
from ..services.place_svc import (
    create_place,
    delete_place,
    get_place_detail,
    list_places,
    parse_id_list,
    update_place,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class PlaceBody(BaseModel):
    name: str | None = None
    address: str | None = None
    address_street: str | None = None
    address_area: str | None = None
    address_city: str | None = None
    address_postcode: str | None = None
    phone: str | None = None
    second_phone: str | None = None
    email: str | None = None
    website: str | None = None
    description: str | None = None
    specialties: str | None = None
    opening_hours: str | None = None
    lat: float | None = None
    lng: float | None = None
    type_id: int | None = None
    price_range: str | None = None
    has_disabled_access: bool | None = None
    has_toilet_facilities: bool | None = None
    trade_associations: str | None = None
    facebook_url: str | None = None
    instagram_url: str | None = None
    pinterest_url: str | None = None
    twitter_url: str | None = None
    youtube_url: str | None = None
    snapchat_url: str | None = None
    tiktok_url: str | None = None
    specialty_ids: list[int] | None = None


@router.get("/api/places")
def api_places(
    id: int | None = Query(None),
    type_id: int | None = Query(None),
    price_range: str | None = Query(None),
    search: str | None = Query(None),
    specialties: str | None = Query(None, description="Comma-separated specialty ids"),
):
    if id is not None:
        return api_place_get(id)
    try:
        return list_places(type_id, price_range, search, parse_id_list(specialties))
    except Exception:
        logger.exception("Error fetching places")
        return JSONResponse(content=[], status_code=500)


@router.get("/api/places/{place_id}")
def api_place_get(place_id: int):
    try:
        place = get_place_detail(place_id)
    except Exception:
        logger.exception("Error fetching place %s", place_id)
        raise HTTPException(status_code=500, detail="Failed to fetch place")
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


@router.post("/api/places", status_code=201)
def api_place_create(body: PlaceBody):
    log = LogContext("CREATE_PLACE")
    data = body.model_dump(exclude_unset=True)
    log.set_payload(data)
    try:
        place = create_place(data, log)
        log.write("OK")
        return place
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except sqlite3.IntegrityError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=f"Invalid reference: {e}")
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error creating place")
        raise HTTPException(status_code=500, detail="Failed to create place")


@router.put("/api/places")
def api_place_update(body: PlaceBody, id: int | None = Query(None)):
    if id is None:
        raise HTTPException(status_code=400, detail="Place ID is required")
    log = LogContext("UPDATE_PLACE")
    data = body.model_dump(exclude_unset=True)
    log.set_payload(data)
    try:
        place = update_place(id, data, log)
        log.write("OK")
        return place
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except sqlite3.IntegrityError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=f"Invalid reference: {e}")
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error updating place %s", id)
        raise HTTPException(status_code=500, detail="Failed to update place")


@router.delete("/api/places")
def api_place_delete(id: int | None = Query(None)):
    if id is None:
        raise HTTPException(status_code=400, detail="Place ID is required")
    log = LogContext("DELETE_PLACE")
    try:
        delete_place(id, log)
        log.write("OK")
        return {"success": True}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error deleting place %s", id)
        raise HTTPException(status_code=500, detail="Failed to delete place")
