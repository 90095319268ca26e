"""Service layer - aggregation, favorites, user items and the planner facade."""

from planner.services.favorites import FavoritesRegistry
from planner.services.items import ItemStore
from planner.services.planner import PlannerService, create_default_planner
from planner.services.sports_data import ScheduleAggregator

__all__ = [
    "FavoritesRegistry",
    "ItemStore",
    "PlannerService",
    "ScheduleAggregator",
    "create_default_planner",
]
