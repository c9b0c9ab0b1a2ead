from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, Body, HTTPException, Query
from pydantic import BaseModel

from ..logs import LogContext
from ..services.place_svc import parse_id_list
from ..services.specialty_svc import (
    create_specialty,
    delete_specialty,
    formatted_specialties_for_place,
    list_specialties,
    save_specialties_for_place,
    update_specialty,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class SpecialtyCreate(BaseModel):
    name: str
    description: str | None = None
    parent_id: int | None = None


class SpecialtyUpdate(BaseModel):
    id: int
    name: str | None = None
    description: str | None = None
    parent_id: int | None = None


class SpecialtyDelete(BaseModel):
    id: int


@router.get("/api/specialties")
def api_specialties(
    type_id: int | None = Query(None),
    place_id: int | None = Query(None),
    parent_id: int | None = Query(None),
    ids: str | None = Query(None, description="Comma-separated specialty ids"),
    name: list[str] | None = Query(None),
    main_only: bool = Query(False),
    hierarchical: bool = Query(False),
):
    id_list = None
    if ids is not None:
        id_list = parse_id_list(ids)
        if not id_list:
            raise HTTPException(status_code=400, detail="Invalid ids parameter")
    try:
        return list_specialties(
            type_id=type_id,
            place_id=place_id,
            parent_id=parent_id,
            ids=id_list,
            names=name,
            main_only=main_only,
            hierarchical=hierarchical,
        )
    except Exception:
        logger.exception("Error fetching specialties")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/api/specialties")
def api_specialties_save(place_id: int | None = Query(None), specialty_ids: list[int] = Body(...)):
    """Replace the specialties linked to a place with the ids in the body."""
    if not place_id:
        raise HTTPException(status_code=400, detail="Missing place_id parameter")
    log = LogContext("SAVE_PLACE_SPECIALTIES")
    log.set_entity("PLACE", place_id)
    log.set_payload({"specialty_ids": specialty_ids})
    try:
        text = save_specialties_for_place(place_id, specialty_ids)
        log.set_after({"specialties": text})
        log.write("OK")
        return {"success": True, "specialties": text}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except sqlite3.IntegrityError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail="Unknown specialty id")
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error saving specialties for place %s", place_id)
        raise HTTPException(status_code=500, detail="Failed to save specialties")


@router.post("/api/specialties/create", status_code=201)
def api_specialty_create(body: SpecialtyCreate):
    log = LogContext("CREATE_SPECIALTY")
    log.set_payload(body.model_dump())
    try:
        row = create_specialty(body.name, body.description, body.parent_id, log)
        log.write("OK")
        return row
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error creating specialty")
        raise HTTPException(status_code=500, detail="Failed to create specialty")


@router.post("/api/specialties/update")
def api_specialty_update(body: SpecialtyUpdate):
    log = LogContext("UPDATE_SPECIALTY")
    fields = body.model_dump(exclude_unset=True)
    fields.pop("id", None)
    log.set_payload(fields)
    if not fields:
        raise HTTPException(status_code=400, detail="Nothing to update")
    try:
        row = update_specialty(body.id, fields, log)
        log.write("OK")
        return row
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error updating specialty %s", body.id)
        raise HTTPException(status_code=500, detail="Failed to update specialty")


@router.post("/api/specialties/delete")
def api_specialty_delete(body: SpecialtyDelete):
    log = LogContext("DELETE_SPECIALTY")
    try:
        delete_specialty(body.id, log)
        log.write("OK")
        return {"success": True}
    except ValueError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        logger.exception("Error deleting specialty %s", body.id)
        raise HTTPException(status_code=500, detail="Failed to delete specialty")


@router.get("/api/place-specialties")
def api_place_specialties(place_id: int | None = Query(None)):
    if place_id is None:
        raise HTTPException(status_code=400, detail="place_id is required")
    try:
        return formatted_specialties_for_place(place_id)
    except Exception:
        logger.exception("Error fetching specialties for place %s", place_id)
        raise HTTPException(status_code=500, detail="Failed to fetch specialties")
