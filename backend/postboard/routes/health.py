"""
Postboard Backend — Health Check Routes
=========================================

What:  Liveness and readiness probes.

    GET /health        → 200 {"status": "OK"} whenever the process is up.
                         Never touches the database, so a database outage
                         does not get the container restarted.
    GET /health/ready  → 200 when `SELECT 1` succeeds, 503 otherwise.
                         Used by load balancers to stop routing traffic.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from postboard.database import Database, get_database
from postboard.schemas.common import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK")


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
    summary="Readiness probe",
)
async def readiness_check(database: Database = Depends(get_database)):
    if await database.ping():
        return ReadinessResponse(status="OK", database="connected")

    logger.warning("Readiness check failed: database unreachable")
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="UNAVAILABLE", database="disconnected").model_dump(),
    )
