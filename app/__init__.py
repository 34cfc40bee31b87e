# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main entry point that tells Python this 'app' folder contains our Mindful Garden
# backend code and sets up the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info and package metadata
# for the Mindful Garden FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - Package imports throughout the application

"""
Mindful Garden - Journaling Companion Backend

A virtual plant that grows with each journal entry, rewards consistent
streaks with flowers and fruit, and wilts when the journal is neglected.
"""

__version__ = "1.0.0"
__title__ = "Mindful Garden API"
__description__ = "Plant growth engine for a journaling companion"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
