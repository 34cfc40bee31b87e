# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: sends plant requests to the plant endpoints
# and health probes to the health endpoints.
# 🧪 Purpose (Technical Summary):
# Main API v1 router aggregation combining module routers under their route prefixes,
# plus the v1 info endpoint.
# 🔗 Dependencies:
# FastAPI, app.api.v1.health, app.modules.plant_growth.presentation.api.v1
# 🔄 Connected Modules / Calls From:
# app.main (mounted under /api/v1)

import logging

from fastapi import APIRouter

from app.modules.plant_growth.presentation.api.v1.plants import plants_router

from . import ROUTE_PREFIXES, get_api_info
from .health import health_router

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

api_v1_router.include_router(
    health_router,
    prefix=ROUTE_PREFIXES["health"],
    tags=["Health Check"]
)

api_v1_router.include_router(
    plants_router,
    prefix=ROUTE_PREFIXES["plants"],
    tags=["Plants"]
)


@api_v1_router.get("/",
                   summary="API v1 Information",
                   description="API v1 version information and route prefixes",
                   tags=["API Info"])
async def api_v1_info() -> dict:
    return {
        **get_api_info(),
        "documentation": {
            "openapi_schema": "/openapi.json",
            "swagger_ui": "/docs",
            "redoc": "/redoc",
        },
    }
