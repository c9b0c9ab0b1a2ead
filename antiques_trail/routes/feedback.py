from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from ..services.feedback_svc import (
    list_specialty_requests,
    record_specialty_search,
    specialty_search_stats,
    submit_specialty_request,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class SpecialtyRequestBody(BaseModel):
    place_id: int | None = Field(None, alias="placeId")
    request_text: str | None = Field(None, alias="requestText")


class SpecialtySearchBody(BaseModel):
    specialty_id: int | None = Field(None, alias="specialtyId")


def _client_ip(request: Request) -> str:
    fwd = request.headers.get("x-forwarded-for")
    if fwd:
        return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/api/specialty-requests")
def api_specialty_request_create(body: SpecialtyRequestBody):
    try:
        new_id = submit_specialty_request(body.place_id, body.request_text)
        return {"success": True, "id": new_id, "message": "Specialty request submitted successfully."}
    except ValueError as e:
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        logger.exception("Error in POST /api/specialty-requests")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/api/specialty-requests")
def api_specialty_requests(place_id: int | None = Query(None), status: str = Query("pending")):
    try:
        return list_specialty_requests(place_id, status)
    except Exception:
        logger.exception("Error in GET /api/specialty-requests")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/api/specialty-searches")
def api_specialty_search_create(body: SpecialtySearchBody, request: Request):
    try:
        record_specialty_search(body.specialty_id, _client_ip(request), request.cookies.get("session_id"))
        return {"success": True}
    except ValueError as e:
        raise HTTPException(status_code=getattr(e, "status_code", 400), detail=str(e))
    except Exception:
        logger.exception("Error in POST /api/specialty-searches")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/api/specialty-searches")
def api_specialty_searches(days: int = Query(7, ge=1), limit: int = Query(20, ge=1, le=500)):
    try:
        return specialty_search_stats(days, limit)
    except Exception:
        logger.exception("Error in GET /api/specialty-searches")
        raise HTTPException(status_code=500, detail="Internal server error")
