"""
🧭 SeriesGate • API v1 Router Aggregator
=======================================

Exports both the **combined `router`** and each **individual sub-router**.

Quick usage
-----------
    from seriesgate.api.v1.routers import router as v1_router
    app.include_router(v1_router, prefix="/api/v1")
"""

from fastapi import APIRouter

from .series import router as series_router
from .exams import router as exams_router


def build_v1_router() -> APIRouter:
    """Compose the API v1 surface (series + exams) into one `APIRouter`."""
    r = APIRouter()
    r.include_router(series_router)
    r.include_router(exams_router)
    return r


router = build_v1_router()


__all__ = [
    "router",
    "build_v1_router",
    "series_router",
    "exams_router",
]
