"""Favorites registry - the followed sports and teams.

Drives which adapters the aggregator runs and which fixtures they keep.
State is loaded once at construction and written through to the store
on every mutation. Changes apply to the next aggregation.

Invariants:
- sports are unique by name, teams unique by name within a sport (names
  compare case-insensitively, the first spelling is kept)
- a sport with no teams is removed
"""

import logging
from collections.abc import Iterable

from planner.core.errors import PersistenceError
from planner.core.interfaces import FavoritesStore
from planner.core.types import FollowedSport, FollowedTeam

logger = logging.getLogger(__name__)


def _clean_name(value: str, what: str) -> str:
    name = (value or "").strip()
    if not name:
        raise ValueError(f"{what} name must not be empty")
    return name


def _key(name: str) -> str:
    return name.strip().casefold()


def _has_team(teams: Iterable[FollowedTeam], name: str) -> bool:
    return any(_key(t.name) == _key(name) for t in teams)


def _normalize(sports: list[FollowedSport]) -> list[FollowedSport]:
    """Merge duplicate sports, drop duplicate teams and empty sports.

    Names compare case-insensitively; the first spelling seen is kept.
    """
    merged: dict[str, tuple[str, list[FollowedTeam]]] = {}
    for sport in sports:
        _, teams = merged.setdefault(_key(sport.name), (sport.name, []))
        for team in sport.teams:
            if not _has_team(teams, team.name):
                teams.append(team)
    return [
        FollowedSport(name=name, teams=tuple(teams)) for name, teams in merged.values() if teams
    ]


class FavoritesRegistry:
    """Followed sports with write-through persistence."""

    def __init__(self, store: FavoritesStore):
        self._store = store
        self._sports: list[FollowedSport] = self._load()

    def _load(self) -> list[FollowedSport]:
        try:
            sports = _normalize(self._store.load_favorites())
        except PersistenceError as e:
            logger.warning("Ignoring unreadable favorites, starting empty: %s", e)
            return []
        logger.info("Loaded %d followed sport(s)", len(sports))
        return sports

    def _save(self) -> None:
        self._store.save_favorites(list(self._sports))

    def _index(self, sport: str) -> int | None:
        for i, followed in enumerate(self._sports):
            if _key(followed.name) == _key(sport):
                return i
        return None

    def list(self) -> list[FollowedSport]:
        """Current followed sports, in the order they were first followed."""
        return list(self._sports)

    def add(self, sport: str, team: str) -> bool:
        """Follow a team, creating the sport if needed.

        Returns:
            True if state changed, False if the team was already followed

        Raises:
            ValueError: If a name is blank
        """
        sport = _clean_name(sport, "Sport")
        new_team = FollowedTeam(name=_clean_name(team, "Team"))

        index = self._index(sport)
        if index is None:
            self._sports.append(FollowedSport(name=sport, teams=(new_team,)))
        else:
            current = self._sports[index]
            if _has_team(current.teams, new_team.name):
                return False
            self._sports[index] = FollowedSport(
                name=current.name, teams=(*current.teams, new_team)
            )

        self._save()
        logger.info("Following %s / %s", sport, new_team.name)
        return True

    def remove(self, sport: str, team: str) -> bool:
        """Unfollow a team; the sport goes too when its last team does.

        Returns:
            True if state changed
        """
        sport = sport.strip()
        team = team.strip()
        index = self._index(sport)
        if index is None:
            return False

        current = self._sports[index]
        teams = tuple(t for t in current.teams if _key(t.name) != _key(team))
        if len(teams) == len(current.teams):
            return False

        if teams:
            self._sports[index] = FollowedSport(name=current.name, teams=teams)
        else:
            del self._sports[index]

        self._save()
        logger.info("Unfollowed %s / %s", sport, team)
        return True

    def toggle(self, sport: str, team: str) -> bool:
        """Follow the team if not followed, otherwise unfollow it.

        Returns:
            True if the team is followed afterwards
        """
        if self.is_following(sport, team):
            self.remove(sport, team)
            return False
        self.add(sport, team)
        return True

    def remove_sport(self, sport: str) -> bool:
        """Unfollow a sport with all its teams."""
        index = self._index(sport.strip())
        if index is None:
            return False
        del self._sports[index]
        self._save()
        logger.info("Unfollowed sport %s", sport)
        return True

    def clear(self) -> None:
        """Unfollow everything."""
        self._sports = []
        self._save()

    def is_following(self, sport: str, team: str) -> bool:
        index = self._index(sport.strip())
        if index is None:
            return False
        return _has_team(self._sports[index].teams, team)
