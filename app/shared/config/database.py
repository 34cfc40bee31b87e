# 📄 File: app/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Describes the common foundation every Mindful Garden database table is built on,
# including how constraints and indexes get their names.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy 2.x DeclarativeBase with a naming convention shared by the ORM models
# and Alembic autogenerate, plus engine keyword arguments per backend.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - app.shared.infrastructure.database.connection
# - Plant growth SQLAlchemy models
# - migrations/env.py

from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from .settings import Settings


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class DatabaseBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides the shared metadata configuration for every table
    in the Mindful Garden application.
    """
    metadata = metadata


# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

def build_engine_kwargs(settings: Settings, database_url: str) -> Dict[str, Any]:
    """Get SQLAlchemy engine configuration based on backend and environment."""
    base_config: Dict[str, Any] = {
        "echo": settings.DEBUG and settings.is_development and settings.LOG_LEVEL == "DEBUG",
    }

    if database_url.startswith("sqlite"):
        base_config["connect_args"] = {"check_same_thread": False}
        # An in-memory database only lives as long as its single connection
        if ":memory:" in database_url or database_url.endswith("://"):
            base_config["poolclass"] = StaticPool
        return base_config

    base_config.update({
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "server_settings": {
                "application_name": f"mindful_garden_{settings.ENVIRONMENT}",
                "jit": "off",
            }
        },
    })

    if settings.is_production:
        base_config["connect_args"]["command_timeout"] = 30
        base_config["connect_args"]["server_settings"]["timezone"] = "UTC"

    return base_config
