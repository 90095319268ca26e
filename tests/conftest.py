"""Shared fixtures: fake HTTP fetcher, timezone pinning, adapters."""

import json
from collections.abc import Mapping

import pytest

from planner.config import PlannerConfig, ProviderSettings, set_config
from planner.core.errors import NetworkError
from planner.utilities.cache import ResponseCache

TSDB_BASE = "https://tsdb.test/api/v1/json"
MLB_BASE = "https://mlb.test/api/v1"
NHL_BASE = "https://nhl.test/api/v1"
ERGAST_BASE = "https://ergast.test/api/f1"


def make_config(timezone: str = "UTC", **kwargs) -> PlannerConfig:
    return PlannerConfig(
        timezone=timezone,
        providers={
            "thesportsdb": ProviderSettings(base_url=TSDB_BASE, api_key="3"),
            "mlb": ProviderSettings(base_url=MLB_BASE),
            "nhl": ProviderSettings(base_url=NHL_BASE),
            "ergast": ProviderSettings(base_url=ERGAST_BASE),
        },
        **kwargs,
    )


class FakeFetcher:
    """HttpFetcher serving canned responses and recording requests.

    Routes map URL -> JSON-able payload, (bytes, status) tuple, or an
    exception instance to raise. Unknown URLs raise NetworkError.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, dict]] = []

    async def fetch(self, url: str, headers: Mapping[str, str] | None = None):
        self.calls.append((url, dict(headers or {})))
        if url not in self.routes:
            raise NetworkError(f"no route for {url}", url=url)
        response = self.routes[url]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, tuple):
            return response
        return json.dumps(response).encode(), 200

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture(autouse=True)
def utc_config():
    """Pin configuration (UTC, test provider URLs) for every test."""
    config = make_config()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def new_york(utc_config):
    set_config(make_config(timezone="America/New_York"))


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def cache():
    return ResponseCache()
