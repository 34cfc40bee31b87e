# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A doctor's checkup for the service itself (not the plants): tells load balancers and
# monitoring whether the API is running and whether the database answers.
# 🧪 Purpose (Technical Summary):
# Liveness, readiness and detailed health endpoints. Readiness reports 503 when the
# database health check fails.
# 🔗 Dependencies:
# FastAPI, app.shared.infrastructure.database.connection, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from app.shared.config.settings import get_settings
from app.shared.infrastructure.database.connection import database_health_check
from app.shared.utils.logging import SERVICE_NAME, log_health_check

logger = logging.getLogger(__name__)

health_router = APIRouter()

# Application start time for uptime calculation
_app_start_time = datetime.now(timezone.utc)


@health_router.get("",
                   summary="Basic Health Check",
                   description="Basic health check endpoint for load balancers and monitoring")
async def health_check() -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
        }
    )


@health_router.get("/live",
                   summary="Liveness Probe",
                   description="Returns 200 while the process is running")
async def liveness_probe() -> Response:
    return Response(status_code=200, content="OK")


@health_router.get("/ready",
                   summary="Readiness Probe",
                   description="Returns 200 once the database is reachable")
async def readiness_probe() -> JSONResponse:
    """
    Readiness probe

    The plant endpoints are useless without the database, so readiness
    is the database health check.
    """
    db_health = await database_health_check()
    ready = db_health.get("status") == "healthy"
    log_health_check("database", db_health.get("status", "unknown"))

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": db_health,
        }
    )


@health_router.get("/detailed",
                   summary="Detailed Health Check",
                   description="Component health with uptime and response time")
async def detailed_health_check() -> JSONResponse:
    start_time = datetime.now(timezone.utc)
    components = {"database": await database_health_check()}

    overall_status = "healthy"
    if components["database"].get("status") != "healthy":
        overall_status = "unhealthy"

    now = datetime.now(timezone.utc)
    return JSONResponse(
        status_code=200 if overall_status == "healthy" else 503,
        content={
            "status": overall_status,
            "timestamp": now.isoformat(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
            "environment": get_settings().ENVIRONMENT,
            "uptime_seconds": (now - _app_start_time).total_seconds(),
            "response_time_seconds": (now - start_time).total_seconds(),
            "components": components,
        }
    )
