from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..logs import LogContext
from ..services.online_sales_svc import (
    create_online_sales_link,
    delete_online_sales_link,
    get_online_sales_links_by_place_id,
    update_online_sales_link,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class OnlineSalesLinkCreate(BaseModel):
    place_id: int
    platform_name: str
    url: str
    description: str | None = None


class OnlineSalesLinkUpdate(BaseModel):
    platform_name: str | None = None
    url: str | None = None
    description: str | None = None


@router.get("/api/online-sales-links")
def api_online_sales_links(place_id: str | None = Query(None, alias="placeId")):
    if place_id is None or not place_id.strip():
        raise HTTPException(status_code=400, detail="Place ID is required")
    try:
        pid = int(place_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Place ID must be an integer")
    try:
        return get_online_sales_links_by_place_id(pid)
    except Exception:
        logger.exception("Error fetching online sales links for place %s", pid)
        raise HTTPException(status_code=500, detail="Failed to fetch online sales links")


@router.post("/api/online-sales-links", status_code=201)
def api_online_sales_link_create(body: OnlineSalesLinkCreate):
    log = LogContext("CREATE_ONLINE_SALES_LINK")
    log.set_payload(body.model_dump())
    try:
        link = create_online_sales_link(body.place_id, body.model_dump(), log)
        log.write("OK")
        return link
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error creating online sales link")
        raise HTTPException(status_code=500, detail="Failed to create online sales link")


@router.put("/api/online-sales-links/{link_id}")
def api_online_sales_link_update(link_id: int, body: OnlineSalesLinkUpdate):
    log = LogContext("UPDATE_ONLINE_SALES_LINK")
    data = body.model_dump(exclude_unset=True)
    log.set_payload(data)
    try:
        link = update_online_sales_link(link_id, data, log)
        log.write("OK")
        return link
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error updating online sales link %s", link_id)
        raise HTTPException(status_code=500, detail="Failed to update online sales link")


@router.delete("/api/online-sales-links/{link_id}")
def api_online_sales_link_delete(link_id: int):
    log = LogContext("DELETE_ONLINE_SALES_LINK")
    try:
        delete_online_sales_link(link_id, log)
        log.write("OK")
        return {"success": True}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error deleting online sales link %s", link_id)
        raise HTTPException(status_code=500, detail="Failed to delete online sales link")
