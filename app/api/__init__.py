# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a Python package holding the web-facing parts of Mindful Garden:
# the versioned routes and the request logging layer.
# 🧪 Purpose (Technical Summary):
# Package initialization for the HTTP layer with API version constants and the
# exceptions the application-wide error envelope is built from.
# 🔗 Dependencies:
# app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.main, app.api.v1.router, app.api.middleware

"""
Mindful Garden API Package

Structure:
    api/
    ├── __init__.py          # This file
    ├── middleware/          # Request logging
    │   └── logging.py
    └── v1/                  # API version 1
        ├── router.py        # Main v1 router
        ├── health.py        # Service health endpoints
        └── [module routers] # Plant growth routes live in their module
"""

__version__ = "1.0.0"
__description__ = "Mindful Garden REST API"

API_PREFIX = "/api"
CURRENT_VERSION = "v1"
SUPPORTED_VERSIONS = ["v1"]

from app.shared.core.exceptions import (
    ConcurrencyConflictError,
    DuplicateResourceError,
    MindfulGardenException,
    NotFoundError,
    PlantNotFoundError,
    ValidationError,
)

__all__ = [
    "MindfulGardenException",
    "ValidationError",
    "NotFoundError",
    "PlantNotFoundError",
    "DuplicateResourceError",
    "ConcurrencyConflictError",
    "API_PREFIX",
    "CURRENT_VERSION",
    "SUPPORTED_VERSIONS",
]
