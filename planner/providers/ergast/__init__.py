"""Ergast-compatible provider - Formula 1 race weekends."""

from planner.providers.ergast.provider import ErgastAdapter

__all__ = ["ErgastAdapter"]
