"""
ShopAPI Backend — Health Check Route
======================================

What:  GET /health for container health checks and load balancers.
How:   Pings whichever datastore the app holds on `app.state` (the relational
       Database or the DocumentStore). Both expose `ping()`.

Status levels:
    - healthy:   datastore answered (HTTP 200)
    - unhealthy: datastore unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from shop_api import __version__
from shop_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    state = request.app.state
    store = getattr(state, "database", None) or getattr(state, "document_store", None)

    connected = store is not None and await store.ping()
    if not connected:
        logger.warning("Health check: datastore unreachable")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        datastore="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
