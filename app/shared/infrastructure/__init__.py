"""
Infrastructure layer package for Mindful Garden.
Provides the database connection and session management.
"""

__all__ = []
