"""Runtime configuration.

Values come from environment variables with sensible defaults. The loaded
configuration is cached module-wide; tests swap it with set_config().

Provider API keys are configuration, not logic: each adapter reads its own
ProviderSettings entry (base URL, key, optional key header).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "UTC"
DEFAULT_DB_PATH = "planner.db"
DEFAULT_HTTP_TIMEOUT = 10.0

# Free-tier TheSportsDB key is "3"
DEFAULT_PROVIDERS = {
    "thesportsdb": ("https://www.thesportsdb.com/api/v1/json", "3"),
    "mlb": ("https://statsapi.mlb.com/api/v1", None),
    "nhl": ("https://statsapi.web.nhl.com/api/v1", None),
    "ergast": ("https://api.jolpi.ca/ergast/f1", None),
}


@dataclass(frozen=True)
class ProviderSettings:
    """Connection settings for one upstream provider."""

    base_url: str
    api_key: str | None = None
    api_key_header: str | None = None  # e.g. "X-API-KEY"; None = key not sent as header

    def headers(self) -> dict[str, str]:
        if self.api_key and self.api_key_header:
            return {self.api_key_header: self.api_key}
        return {}


@dataclass(frozen=True)
class PlannerConfig:
    timezone: str = DEFAULT_TIMEZONE
    database_path: str = DEFAULT_DB_PATH
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"
    dedupe_requests: bool = False
    providers: dict[str, ProviderSettings] = field(default_factory=dict)

    def provider(self, name: str) -> ProviderSettings:
        """Settings for a provider, falling back to built-in defaults."""
        if name in self.providers:
            return self.providers[name]
        base_url, api_key = DEFAULT_PROVIDERS[name]
        return ProviderSettings(base_url=base_url, api_key=api_key)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(env: Mapping[str, str] | None = None) -> PlannerConfig:
    """Build configuration from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        PlannerConfig

    Raises:
        ValueError: If a numeric value cannot be parsed
    """
    env = os.environ if env is None else env

    providers = {}
    for name, (base_url, api_key) in DEFAULT_PROVIDERS.items():
        prefix = name.upper()
        providers[name] = ProviderSettings(
            base_url=env.get(f"{prefix}_BASE_URL", base_url).rstrip("/"),
            api_key=env.get(f"{prefix}_API_KEY", api_key),
            api_key_header=env.get(f"{prefix}_API_KEY_HEADER"),
        )

    return PlannerConfig(
        timezone=env.get("PLANNER_TIMEZONE", DEFAULT_TIMEZONE),
        database_path=env.get("PLANNER_DB_PATH", DEFAULT_DB_PATH),
        http_timeout=float(env.get("PLANNER_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
        log_level=env.get("PLANNER_LOG_LEVEL", "INFO").upper(),
        dedupe_requests=_env_bool(env.get("PLANNER_DEDUPE_REQUESTS"), False),
        providers=providers,
    )


_config: PlannerConfig | None = None


def get_config() -> PlannerConfig:
    """Get the active configuration, loading it from the environment once."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: PlannerConfig | None) -> None:
    """Replace the active configuration (None = reload from environment)."""
    global _config
    _config = config


def set_user_timezone(tz_name: str) -> None:
    """Change the user timezone for the rest of the process.

    Raises:
        ValueError: If tz_name is not a known IANA timezone
    """
    _validate_timezone(tz_name)
    set_config(replace(get_config(), timezone=tz_name))


def _validate_timezone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz_name}") from e


def get_user_timezone_str() -> str:
    return get_config().timezone


def get_user_timezone() -> ZoneInfo:
    return _validate_timezone(get_user_timezone_str())
