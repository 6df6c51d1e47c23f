"""Use cases for per-user notification preferences."""

from .preferences import get_preferences, update_preferences

__all__ = ["get_preferences", "update_preferences"]
