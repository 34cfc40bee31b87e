# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools that every
# part of Mindful Garden can use, like settings, logging and the database connection.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, infrastructure and cross-cutting concerns.
#
# 🔄 Connected Modules / Calls From:
# - app.modules.plant_growth
# - app.main, app.api, background jobs

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database infrastructure
- Exceptions, clock and event bus
- Logging utilities
"""

__all__ = []
