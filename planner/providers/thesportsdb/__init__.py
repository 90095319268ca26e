"""TheSportsDB provider - generic league schedules (EPL, NBA, NHL, UFC, F1, ...)."""

from planner.providers.thesportsdb.leagues import League, league_for_sport
from planner.providers.thesportsdb.provider import TheSportsDBAdapter

__all__ = ["League", "TheSportsDBAdapter", "league_for_sport"]
