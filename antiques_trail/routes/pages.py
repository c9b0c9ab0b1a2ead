"""
Page-level routes: one call per screen, returning the view model built by
services/page_svc.py.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from ..errors import NotFoundError
from ..services import page_svc
from ..services.place_svc import parse_id_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pages")


def _render(builder, *args, **kwargs):
    try:
        return builder(*args, **kwargs)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Error building page %s", builder.__name__)
        raise HTTPException(status_code=500, detail="Failed to load page")


@router.get("/places")
def page_places(
    type_id: int | None = Query(None),
    price_range: str | None = Query(None),
    search: str | None = Query(None),
    specialties: str | None = Query(None),
):
    return _render(page_svc.places_page, type_id, price_range, search, parse_id_list(specialties))


@router.get("/places/{place_id}")
def page_place_detail(place_id: int):
    return _render(page_svc.place_detail_page, place_id)


@router.get("/admin/places")
def page_admin_places(search: str | None = Query(None), type_id: int | None = Query(None)):
    return _render(page_svc.admin_places_page, search, type_id)


@router.get("/admin/places/new")
def page_admin_place_new():
    return _render(page_svc.place_form_page)


@router.get("/admin/places/{place_id}/edit")
def page_admin_place_edit(place_id: int):
    return _render(page_svc.place_form_page, place_id)


@router.get("/types")
def page_types():
    return _render(page_svc.place_types_page)


@router.get("/types/{type_id}/edit")
def page_type_edit(type_id: int):
    return _render(page_svc.place_type_edit_page, type_id)
