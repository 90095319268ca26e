"""API routers."""

from planner.api.routes import cache, favorites, items, settings, timeline

__all__ = ["cache", "favorites", "items", "settings", "timeline"]
