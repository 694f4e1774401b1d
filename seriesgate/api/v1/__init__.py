"""Versioned API (v1) aggregator.

Expose an aggregated FastAPI router via `seriesgate.api.v1.routers.router`.
Prefer importing directly from the routers subpackage:

    from seriesgate.api.v1.routers import router as api_v1_router
"""

__all__ = []
