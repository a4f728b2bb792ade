"""
Status router.

This module contains the health check endpoint.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from weatherdash.database import check_connection
from weatherdash.utils.rate_limit import HEALTH_LIMIT, limiter

router = APIRouter(tags=["status"])


@router.get("/health")
@limiter.limit(HEALTH_LIMIT)
async def health_check(request: Request):
    """
    Health check endpoint.

    No authentication required.

    Rate limit: 60 requests per minute
    """
    state = request.app.state
    return {
        "status": "OK",
        "time": datetime.now(timezone.utc).isoformat(),
        "storageConnected": await check_connection(state.engine),
        "uptime": round(time.monotonic() - state.started_at, 3),
    }
