"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockledger import __version__
from stockledger.api.dependencies import get_inv_store, get_mr_store
from stockledger.application.dto.responses import HealthResponse
from stockledger.core.interfaces import IInventoryStore, IMaterialRequestStore

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    store: IInventoryStore = Depends(get_inv_store),
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and store sizes.
    """
    products = await store.list_records(limit=1_000_000)
    requests = await mr_store.list_requests()
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        products=len(products),
        material_requests=len(requests),
    )
