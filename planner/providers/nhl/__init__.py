"""NHL provider - National Hockey League schedules."""

from planner.providers.nhl.provider import NHLAdapter

__all__ = ["NHLAdapter"]
