"""Tests for the MLB and NHL Stats API adapters."""

import asyncio
from datetime import UTC, date, datetime, timedelta

import pytest

from planner.config import get_config
from planner.core.errors import ParseError
from planner.core.types import FollowedTeam, ItemKind
from planner.providers.mlb import MLBAdapter
from planner.providers.nhl import NHLAdapter

from .conftest import MLB_BASE, NHL_BASE

DAY = date(2024, 6, 1)
MLB_URL = f"{MLB_BASE}/schedule?sportId=1&date=2024-06-01&hydrate=team,venue"
NHL_URL = f"{NHL_BASE}/schedule?date=2024-06-01"


def _game(home, away, game_date="2024-06-01T23:05:00Z", venue="Yankee Stadium", **extra):
    game = {
        "gameDate": game_date,
        "teams": {
            "home": {"team": {"name": home}},
            "away": {"team": {"name": away}},
        },
        "venue": {"name": venue},
    }
    game.update(extra)
    return game


def _schedule(*games, day="2024-06-01"):
    return {"dates": [{"date": day, "games": list(games)}]}


@pytest.fixture
def mlb(fetcher, cache):
    return MLBAdapter(fetcher, cache, get_config().provider("mlb"))


@pytest.fixture
def nhl(fetcher, cache):
    return NHLAdapter(fetcher, cache, get_config().provider("nhl"))


class TestMLB:
    def test_build_url(self, mlb):
        assert mlb.build_url(DAY, "baseball") == MLB_URL

    def test_yankees_game(self, mlb, fetcher, new_york):
        fetcher.routes[MLB_URL] = _schedule(_game("New York Yankees", "Boston Red Sox"))

        items = asyncio.run(mlb.fetch(DAY, [FollowedTeam(name="New York Yankees")]))

        assert len(items) == 1
        item = items[0]
        assert item.kind is ItemKind.FIXTURE
        assert item.title == "Baseball: New York Yankees vs Boston Red Sox"
        assert item.start_time == datetime(2024, 6, 1, 23, 5, tzinfo=UTC)
        assert item.start_time.hour == 19  # local New York time
        assert item.end_time == item.start_time + timedelta(hours=3)
        assert item.calendar_date == DAY
        assert item.venue == "Yankee Stadium"
        assert item.source_note == "MLB Game"

    def test_away_team_matches(self, mlb, fetcher):
        fetcher.routes[MLB_URL] = _schedule(
            _game("Boston Red Sox", "New York Yankees", venue="Fenway Park"),
            _game("Chicago Cubs", "St. Louis Cardinals", venue="Wrigley Field"),
        )

        items = asyncio.run(mlb.fetch(DAY, [FollowedTeam(name="yankees")]))

        assert [i.venue for i in items] == ["Fenway Park"]

    def test_official_date_sets_bucket(self, mlb, fetcher):
        # 01:10 UTC on June 2 is still the June 1 game day for the league
        fetcher.routes[MLB_URL] = _schedule(
            _game("Los Angeles Dodgers", "San Diego Padres",
                  game_date="2024-06-02T01:10:00Z", officialDate="2024-06-01")
        )

        [item] = asyncio.run(mlb.fetch(DAY, [FollowedTeam(name="Dodgers")]))

        assert item.calendar_date == DAY
        assert item.start_time.date() == date(2024, 6, 2)

    def test_no_games(self, mlb, fetcher):
        fetcher.routes[MLB_URL] = {"dates": [], "totalGames": 0}
        assert asyncio.run(mlb.try_fetch(DAY, [FollowedTeam(name="Yankees")])) == []

    def test_missing_dates_key(self, mlb, fetcher):
        fetcher.routes[MLB_URL] = {"copyright": "MLB"}
        with pytest.raises(ParseError):
            asyncio.run(mlb.try_fetch(DAY, [FollowedTeam(name="Yankees")]))
        assert asyncio.run(mlb.fetch(DAY, [FollowedTeam(name="Yankees")])) == []

    def test_malformed_game_skipped(self, mlb, fetcher):
        fetcher.routes[MLB_URL] = _schedule(
            {"gameDate": "2024-06-01T17:00:00Z", "teams": {}},
            _game("New York Yankees", "Boston Red Sox"),
        )

        items = asyncio.run(mlb.fetch(DAY, [FollowedTeam(name="Yankees")]))

        assert len(items) == 1


class TestNHL:
    def test_build_url(self, nhl):
        assert nhl.build_url(DAY, "hockey") == NHL_URL

    def test_default_duration_is_two_and_a_half_hours(self, nhl, fetcher):
        fetcher.routes[NHL_URL] = _schedule(
            _game("Florida Panthers", "New York Rangers", game_date="2024-06-01T00:00:00Z",
                  venue="Amerant Bank Arena")
        )

        [item] = asyncio.run(nhl.fetch(DAY, [FollowedTeam(name="Rangers")]))

        assert item.title == "Hockey: Florida Panthers vs New York Rangers"
        assert item.end_time - item.start_time == timedelta(hours=2, minutes=30)
        assert item.source_note == "NHL Game"
        assert item.venue == "Amerant Bank Arena"

    def test_unfollowed_teams_dropped(self, nhl, fetcher):
        fetcher.routes[NHL_URL] = _schedule(_game("Dallas Stars", "Edmonton Oilers"))
        assert asyncio.run(nhl.fetch(DAY, [FollowedTeam(name="Bruins")])) == []
