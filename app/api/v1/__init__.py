# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes version 1 of the garden API so later versions can be added without breaking
# the apps that already talk to this one.
# 🧪 Purpose (Technical Summary):
# Package initialization for API version 1: version metadata, route prefixes and OpenAPI
# tags consumed by the v1 router.
# 🔗 Dependencies:
# None (plain configuration)
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main

"""
Mindful Garden API Version 1

Structure:
    v1/
    ├── __init__.py          # This file
    ├── router.py            # Main v1 router aggregation
    └── health.py            # Service health endpoints

Module routers:
    plant_growth             # /plants, the virtual plant growth engine
"""

from typing import Any, Dict

__version__ = "1.0.0"
__api_version__ = "v1"
__status__ = "stable"

API_V1_CONFIG = {
    "version": __version__,
    "api_version": __api_version__,
    "status": __status__,
    "description": "Mindful Garden API Version 1",
    "features": [
        "plant_growth",
        "streaks",
        "rewards",
        "plant_health",
    ],
}

ROUTE_PREFIXES = {
    "plants": "/plants",
    "health": "/health",
}

API_TAGS = [
    {
        "name": "Plants",
        "description": "Virtual plant growth driven by journaling activity"
    },
    {
        "name": "Health Check",
        "description": "Service health and status monitoring"
    },
]


def get_api_info() -> Dict[str, Any]:
    """API v1 metadata for the info endpoint."""
    return {
        **API_V1_CONFIG,
        "route_prefixes": ROUTE_PREFIXES,
    }


__all__ = [
    "API_V1_CONFIG",
    "ROUTE_PREFIXES",
    "API_TAGS",
    "get_api_info",
]
