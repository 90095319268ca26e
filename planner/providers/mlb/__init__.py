"""MLB provider - Major League Baseball schedules from statsapi.mlb.com."""

from planner.providers.mlb.provider import MLBAdapter

__all__ = ["MLBAdapter"]
