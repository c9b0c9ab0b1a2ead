from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ..db import get_conn
from ..logs import LogContext
from ..migrations import apply_migrations, current_version

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/migrate")
def api_migrate():
    log = LogContext("MIGRATE")
    try:
        with get_conn() as conn:
            applied = apply_migrations(conn)
            version = current_version(conn)
        log.set_after({"applied": applied, "version": version})
        log.write("OK")
        return {"success": True, "applied": applied, "version": version}
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=f"Migration failed: {e}")
