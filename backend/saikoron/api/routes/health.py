"""Health Probes — is the process up, and can it reach the tool store.

Invariants:
    - GET /health/ answers 200 whenever the app is serving requests
    - GET /health/ready answers 503 until the tool store accepts a query
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import saikoron
import saikoron.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "ok", "service": "saikoron", "version": saikoron.__version__}


@router.get("/ready")
async def readiness():
    """Ready once the tool store is reachable."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "tool_store": "unreachable"},
        )
    return {"status": "ready", "tool_store": "reachable"}
