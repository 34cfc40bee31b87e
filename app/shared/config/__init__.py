# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell Mindful Garden how to connect to its database,
# how loud to log, and how the plant engine should behave.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management
# and the SQLAlchemy declarative base.
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - All modules requiring configuration

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
