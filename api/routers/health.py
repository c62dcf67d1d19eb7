"""
Health check router.

This router provides health check endpoints for monitoring and load balancers:
- GET /health - Liveness
- GET /health/ready - Readiness (record store configured, cache statistics)
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint for lifttracker-api.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/ready")
def readiness(request: Request):
    """
    Readiness endpoint.

    Returns 503 until a record store is available.
    """
    store_ready = getattr(request.app.state, "record_store", None) is not None
    cache = getattr(request.app.state, "cache", None)
    body = {
        "status": "ok" if store_ready else "unavailable",
        "database": store_ready,
        "cache": cache.stats() if cache is not None else None,
    }
    if not store_ready:
        logger.warning("Readiness check failed: record store not configured")
        return JSONResponse(status_code=503, content=body)
    return body
