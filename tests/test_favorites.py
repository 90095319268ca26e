"""Tests for FavoritesRegistry and its SQLite store."""

import pytest

from planner.core.errors import PersistenceError
from planner.core.types import FollowedSport, FollowedTeam
from planner.database import SqliteFavoritesStore
from planner.database.connection import get_db
from planner.database.favorites import FAVORITES_KEY, decode_favorites
from planner.database.kv import set_value
from planner.services.favorites import FavoritesRegistry


class MemoryStore:
    def __init__(self, sports=None, error=None):
        self.sports = list(sports or [])
        self.error = error
        self.saves = 0

    def load_favorites(self):
        if self.error:
            raise self.error
        return list(self.sports)

    def save_favorites(self, sports):
        self.saves += 1
        self.sports = list(sports)


def _names(registry):
    return [(s.name, s.team_names) for s in registry.list()]


class TestFollowing:
    def test_add_creates_sport(self):
        store = MemoryStore()
        registry = FavoritesRegistry(store)

        assert registry.add("Baseball", "New York Yankees") is True

        assert _names(registry) == [("Baseball", ["New York Yankees"])]
        assert store.saves == 1

    def test_add_to_existing_sport(self):
        registry = FavoritesRegistry(MemoryStore())
        registry.add("Baseball", "Yankees")
        registry.add("Baseball", "Mets")
        registry.add("Football", "Arsenal")

        assert _names(registry) == [
            ("Baseball", ["Yankees", "Mets"]),
            ("Football", ["Arsenal"]),
        ]

    def test_duplicate_is_noop(self):
        store = MemoryStore()
        registry = FavoritesRegistry(store)
        registry.add("Baseball", "Yankees")

        assert registry.add("Baseball", " Yankees ") is False
        assert _names(registry) == [("Baseball", ["Yankees"])]
        assert store.saves == 1

    @pytest.mark.parametrize("sport,team", [("", "Yankees"), ("Baseball", "  ")])
    def test_blank_names_rejected(self, sport, team):
        registry = FavoritesRegistry(MemoryStore())
        with pytest.raises(ValueError):
            registry.add(sport, team)
        assert registry.list() == []

    def test_remove_last_team_prunes_sport(self):
        registry = FavoritesRegistry(MemoryStore())
        registry.add("Hockey", "Rangers")

        assert registry.remove("Hockey", "Rangers") is True
        assert registry.list() == []

    def test_remove_keeps_other_teams(self):
        registry = FavoritesRegistry(MemoryStore())
        registry.add("Hockey", "Rangers")
        registry.add("Hockey", "Bruins")

        registry.remove("Hockey", "Rangers")

        assert _names(registry) == [("Hockey", ["Bruins"])]

    def test_remove_unknown(self):
        store = MemoryStore()
        registry = FavoritesRegistry(store)
        registry.add("Hockey", "Rangers")

        assert registry.remove("Hockey", "Bruins") is False
        assert registry.remove("Baseball", "Rangers") is False
        assert store.saves == 1

    def test_toggle(self):
        registry = FavoritesRegistry(MemoryStore())

        assert registry.toggle("Football", "Arsenal") is True
        assert registry.is_following("Football", "Arsenal")
        assert registry.toggle("Football", "Arsenal") is False
        assert registry.list() == []

    def test_remove_sport_and_clear(self):
        registry = FavoritesRegistry(MemoryStore())
        registry.add("Football", "Arsenal")
        registry.add("Baseball", "Yankees")

        assert registry.remove_sport("Football") is True
        assert registry.remove_sport("Football") is False
        assert _names(registry) == [("Baseball", ["Yankees"])]

        registry.clear()
        assert registry.list() == []

    def test_sport_names_are_case_insensitive(self):
        store = MemoryStore()
        registry = FavoritesRegistry(store)
        registry.add("Baseball", "Yankees")

        assert registry.add("baseball", "Mets") is True
        assert registry.add("BASEBALL", "yankees") is False

        assert _names(registry) == [("Baseball", ["Yankees", "Mets"])]
        assert registry.is_following("baseball", "YANKEES")
        assert registry.remove("baseball", "mets") is True
        assert registry.remove_sport("BaseBall") is True
        assert registry.list() == []


class TestLoading:
    def test_loaded_state_is_normalized(self):
        store = MemoryStore(
            [
                FollowedSport("Football", (FollowedTeam("Arsenal"),)),
                FollowedSport("Baseball", ()),
                FollowedSport("Football", (FollowedTeam("Arsenal"), FollowedTeam("Spurs"))),
            ]
        )

        registry = FavoritesRegistry(store)

        assert _names(registry) == [("Football", ["Arsenal", "Spurs"])]

    def test_loaded_names_merge_case_insensitively(self):
        store = MemoryStore(
            [
                FollowedSport("Football", (FollowedTeam("Arsenal"),)),
                FollowedSport("football", (FollowedTeam("arsenal"), FollowedTeam("Spurs"))),
            ]
        )

        registry = FavoritesRegistry(store)

        assert _names(registry) == [("Football", ["Arsenal", "Spurs"])]

    def test_unreadable_state_starts_empty(self):
        registry = FavoritesRegistry(MemoryStore(error=PersistenceError("bad json")))
        assert registry.list() == []

    def test_list_returns_copy(self):
        registry = FavoritesRegistry(MemoryStore())
        registry.add("Football", "Arsenal")
        registry.list().clear()
        assert len(registry.list()) == 1


class TestSqliteFavoritesStore:
    def test_round_trip_across_instances(self, tmp_path):
        db_path = str(tmp_path / "planner.db")
        registry = FavoritesRegistry(SqliteFavoritesStore(db_path))
        registry.add("Baseball", "New York Yankees")
        registry.add("Formula 1", "Ferrari")

        reloaded = FavoritesRegistry(SqliteFavoritesStore(db_path))

        assert _names(reloaded) == [
            ("Baseball", ["New York Yankees"]),
            ("Formula 1", ["Ferrari"]),
        ]

    def test_empty_database(self, tmp_path):
        store = SqliteFavoritesStore(str(tmp_path / "planner.db"))
        assert store.load_favorites() == []

    def test_malformed_document(self, tmp_path):
        db_path = str(tmp_path / "planner.db")
        store = SqliteFavoritesStore(db_path)
        with get_db(db_path) as conn:
            set_value(conn, FAVORITES_KEY, "{not json")

        with pytest.raises(PersistenceError):
            store.load_favorites()
        assert FavoritesRegistry(store).list() == []

    def test_stored_shape(self, tmp_path):
        db_path = str(tmp_path / "planner.db")
        SqliteFavoritesStore(db_path).save_favorites(
            [FollowedSport("Baseball", (FollowedTeam("Yankees"),))]
        )
        with get_db(db_path) as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (FAVORITES_KEY,)
            ).fetchone()

        assert row["value"] == '[{"name": "Baseball", "teams": [{"name": "Yankees"}]}]'


class TestDecodeFavorites:
    @pytest.mark.parametrize(
        "raw",
        ['{"name": "Baseball"}', '[{"teams": []}]', '[{"name": "x", "teams": [{}]}]', "null"],
    )
    def test_wrong_shape(self, raw):
        with pytest.raises(PersistenceError):
            decode_favorites(raw)
