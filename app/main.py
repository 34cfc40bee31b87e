# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the Mindful Garden service, connects the database,
# and makes sure everything is ready to grow plants when journal entries come in.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point with lifespan-managed database setup,
# middleware registration, router mounting and the application-wide error envelope.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - app.shared.config.settings
# - app.shared.infrastructure.database (connection and session managers)
# - app.api.v1.router
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - API tests (create_application)

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app.api.middleware.logging import RequestLoggingMiddleware, get_request_id
from app.api.v1.router import api_v1_router
from app.shared.config.settings import get_settings
from app.shared.core.exceptions import MindfulGardenException
from app.shared.infrastructure.database.connection import close_database, initialize_database
from app.shared.infrastructure.database.session import session_manager
from app.shared.utils.logging import (
    SERVICE_NAME,
    get_logger,
    log_shutdown_event,
    log_startup_event,
    setup_logging,
)

# Get application settings
settings = get_settings()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects the database and session factory on startup and disposes
    the connection pool on shutdown.
    """
    setup_logging()
    log_startup_event(SERVICE_NAME, settings.APP_VERSION, extra={"environment": settings.ENVIRONMENT})

    try:
        # SQLite deployments have no migration step, so the schema is created in place
        await initialize_database(create_tables=settings.is_sqlite)
        logger.info("✅ Database connection initialized")

        session_manager.initialize()
        logger.info("✅ Session manager initialized")

        logger.info("✅ Mindful Garden API startup complete")
        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        log_shutdown_event(SERVICE_NAME)
        try:
            session_manager.reset()
            await close_database()
            logger.info("✅ Database connections closed")
        except Exception as e:
            logger.error(f"❌ Shutdown error: {e}")


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "request_id": get_request_id(request),
            }
        },
    )


def create_application() -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with middleware,
    routers and exception handlers.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix="/api/v1")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(MindfulGardenException)
    async def mindful_garden_exception_handler(
        request: Request,
        exc: MindfulGardenException
    ) -> JSONResponse:
        """Handle custom Mindful Garden application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}", path=request.url.path)
        else:
            logger.info(f"{exc.error_code}: {exc.message}", path=request.url.path)
        return _error_response(request, exc.status_code, **exc.to_dict()["error"])

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": jsonable_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def internal_server_error_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle 500 Internal Server Error."""
        logger.error(f"Internal server error: {exc}", exc_info=True)
        return _error_response(
            request,
            500,
            "INTERNAL_SERVER_ERROR",
            "An internal server error occurred",
            {"error_type": type(exc).__name__} if settings.DEBUG else {},
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/api/v1/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with only JSON-safe fields."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


# Create the FastAPI application
app = create_application()


def main():
    """
    Main function for running the application in development.

    Used when running with python -m app.main or as a script entry point.
    """
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
