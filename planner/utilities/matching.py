"""Followed-team matching strategies.

Provider team names rarely match what the user typed ("Arsenal" vs
"Arsenal FC"), so the default strategy is a loose case-insensitive
substring test in both directions. It is knowingly false-positive prone:
"Real" matches both "Real Madrid" and "Real Sociedad". ExactTeamMatcher is
the strict alternative.
"""

from collections.abc import Iterable
from typing import Protocol

from planner.core.types import FollowedTeam


class TeamMatcher(Protocol):
    def matches(self, followed: str, candidate: str) -> bool: ...


class SubstringTeamMatcher:
    """Case-insensitive containment, either name inside the other."""

    def matches(self, followed: str, candidate: str) -> bool:
        followed_key = followed.strip().casefold()
        candidate_key = candidate.strip().casefold()
        if not followed_key or not candidate_key:
            return False
        return followed_key in candidate_key or candidate_key in followed_key


class ExactTeamMatcher:
    """Case-insensitive equality."""

    def matches(self, followed: str, candidate: str) -> bool:
        followed_key = followed.strip().casefold()
        return bool(followed_key) and followed_key == candidate.strip().casefold()


DEFAULT_MATCHER: TeamMatcher = SubstringTeamMatcher()


def is_relevant(
    participants: Iterable[str],
    teams: Iterable[FollowedTeam],
    matcher: TeamMatcher = DEFAULT_MATCHER,
) -> bool:
    """Check whether any participant matches any followed team.

    An empty followed list selects everything.
    """
    team_names = [t.name for t in teams]
    if not team_names:
        return True
    names = list(participants)
    return any(matcher.matches(team, name) for team in team_names for name in names)
