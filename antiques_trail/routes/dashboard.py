from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ..services.dashboard_svc import get_dashboard_stats

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/admin/stats")
def api_admin_stats():
    try:
        return get_dashboard_stats()
    except Exception:
        logger.exception("Error fetching dashboard stats")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats")
