"""
FastAPI app entry point aggregating per-domain routers under antiques_trail/routes.
Keep as `uvicorn antiques_trail.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .db import get_conn
from .logs import LogContext, setup_logging
from .migrations import apply_migrations

settings = get_settings()
setup_logging(settings["log_level"], settings["log_file"])
logger = logging.getLogger(__name__)

app = FastAPI(title="edinburgh-antiques-trail", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": ".".join(str(p) for p in err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request parameters", "details": details})


@app.on_event("startup")
def on_startup():
    try:
        with get_conn() as conn:
            apply_migrations(conn)
    except Exception as e:
        LogContext("STARTUP").write("ERROR", f"apply_migrations_failed: {e}")


# Include routers (split by business domain)
from .routes import base as base_routes
from .routes import online_sales as online_sales_routes
from .routes import specialty_counts as specialty_counts_routes
from .routes import places as places_routes
from .routes import place_types as place_types_routes
from .routes import specialties as specialties_routes
from .routes import feedback as feedback_routes
from .routes import dashboard as dashboard_routes
from .routes import maintenance as maintenance_routes
from .routes import pages as pages_routes

app.include_router(base_routes.router)
app.include_router(online_sales_routes.router)
app.include_router(specialty_counts_routes.router)
app.include_router(places_routes.router)
app.include_router(place_types_routes.router)
app.include_router(specialties_routes.router)
app.include_router(feedback_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(maintenance_routes.router)
app.include_router(pages_routes.router)
