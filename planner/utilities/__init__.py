"""Utilities - caching, durations, team matching, timezones, logging."""

from planner.utilities.cache import ResponseCache
from planner.utilities.durations import default_duration, default_end_time
from planner.utilities.logging import setup_logging
from planner.utilities.matching import (
    ExactTeamMatcher,
    SubstringTeamMatcher,
    TeamMatcher,
    is_relevant,
)

__all__ = [
    "ExactTeamMatcher",
    "ResponseCache",
    "SubstringTeamMatcher",
    "TeamMatcher",
    "default_duration",
    "default_end_time",
    "is_relevant",
    "setup_logging",
]
