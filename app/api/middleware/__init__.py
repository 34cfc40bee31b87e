# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the helpers that look at every request before it reaches the garden endpoints,
# such as the request diary.
# 🧪 Purpose (Technical Summary):
# Package initialization for API middleware components with per-middleware configuration
# (excluded paths) shared by the middleware implementations.
# 🔗 Dependencies:
# Starlette middleware components
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration), app.api.middleware.logging

"""
Mindful Garden API Middleware Package

Middleware Components:
    - RequestLoggingMiddleware: HTTP request timing and request id correlation

Error rendering is done by the application exception handlers in app.main.
"""

from typing import Any, Dict

MIDDLEWARE_CONFIG: Dict[str, Dict[str, Any]] = {
    "logging": {
        "exclude_paths": [
            "/api/v1/health/live",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/favicon.ico",
        ],
    },
}


def get_middleware_config(middleware_name: str) -> Dict[str, Any]:
    """Configuration block for a middleware (empty when none is defined)."""
    return MIDDLEWARE_CONFIG.get(middleware_name, {})


def should_exclude_path(middleware_name: str, path: str) -> bool:
    """
    Check if a path should be excluded from middleware processing

    Args:
        middleware_name: Name of the middleware
        path: Request path to check

    Returns:
        True if path should be excluded, False otherwise
    """
    exclude_paths = get_middleware_config(middleware_name).get("exclude_paths", [])

    for exclude_path in exclude_paths:
        if path == exclude_path or path.startswith(exclude_path + "/"):
            return True

    return False


__all__ = [
    "MIDDLEWARE_CONFIG",
    "get_middleware_config",
    "should_exclude_path",
]
