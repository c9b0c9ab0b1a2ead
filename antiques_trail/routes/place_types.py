from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..logs import LogContext
from ..services.place_type_svc import (
    create_place_type,
    delete_place_type,
    get_place_type,
    list_place_types,
    update_place_type,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class PlaceTypeBody(BaseModel):
    name: str | None = None
    description: str | None = None


@router.get("/api/place-types")
def api_place_types():
    try:
        return list_place_types()
    except Exception:
        logger.exception("Error fetching place types")
        raise HTTPException(status_code=500, detail="Failed to fetch place types")


@router.get("/api/place-types/{type_id}")
def api_place_type_get(type_id: int):
    row = get_place_type(type_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Place type not found")
    return row


@router.post("/api/place-types", status_code=201)
def api_place_type_create(body: PlaceTypeBody):
    log = LogContext("CREATE_PLACE_TYPE")
    log.set_payload(body.model_dump())
    try:
        row = create_place_type(body.name, body.description, log)
        log.write("OK")
        return row
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error creating place type")
        raise HTTPException(status_code=500, detail="Failed to create place type")


@router.put("/api/place-types/{type_id}")
def api_place_type_update(type_id: int, body: PlaceTypeBody):
    log = LogContext("UPDATE_PLACE_TYPE")
    log.set_payload(body.model_dump())
    try:
        row = update_place_type(type_id, body.name, body.description, log)
        log.write("OK")
        return row
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error updating place type %s", type_id)
        raise HTTPException(status_code=500, detail="Failed to update place type")


@router.delete("/api/place-types/{type_id}")
def api_place_type_delete(type_id: int):
    log = LogContext("DELETE_PLACE_TYPE")
    try:
        delete_place_type(type_id, log)
        log.write("OK")
        return {"success": True}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error deleting place type %s", type_id)
        raise HTTPException(status_code=500, detail="Failed to delete place type")
