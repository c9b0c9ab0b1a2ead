from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..services.specialty_svc import get_specialty_counts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/specialty-counts")
def api_specialty_counts():
    """Every specialty with the number of distinct places linked to it, by name."""
    try:
        return get_specialty_counts()
    except Exception:
        logger.exception("Error fetching specialty counts")
        return JSONResponse(content=[], status_code=500)
