"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# TOML section -> settings that may be overridden from it
_TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "server": (
        "host",
        "port",
        "log_level",
        "stations_file",
        "allow_builtin_fallback",
        "trust_forwarded_for",
    ),
    "fetch": (
        "fetch_timeout_seconds",
        "fetch_max_retries",
        "fetch_base_delay_ms",
        "fetch_max_delay_ms",
        "fetch_jitter_ms",
        "upstream_min_delay_seconds",
    ),
    "rate_limit": (
        "board_rate_limit",
        "board_rate_window_seconds",
        "rate_limit_max_tracked_clients",
        "rate_limit_per_minute",
    ),
    "display": (
        "auto_refresh_seconds",
        "error_refresh_seconds",
        "search_result_limit",
        "suggestion_limit",
    ),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=3000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root log level")
    trust_forwarded_for: bool = Field(
        default=False,
        description="Take the client IP from X-Forwarded-For (only behind a trusted reverse proxy)",
    )

    # Station directory
    stations_file: str = Field(
        default="stations.json",
        description="Path to the JSON station directory",
    )
    allow_builtin_fallback: bool = Field(
        default=True,
        description="Serve the built-in station list when the directory file is malformed",
    )
    static_dir: str | None = Field(
        default=None,
        description="Directory holding index.html and other static assets",
    )

    # Outbound fetching
    fetch_timeout_seconds: float = Field(
        default=20.0, description="Timeout for a single upstream attempt in seconds"
    )
    fetch_max_retries: int = Field(
        default=3, description="Total number of attempts per upstream fetch"
    )
    fetch_base_delay_ms: int = Field(
        default=1000, description="First backoff delay in milliseconds"
    )
    fetch_max_delay_ms: int = Field(
        default=5000, description="Upper bound of the exponential backoff in milliseconds"
    )
    fetch_jitter_ms: int = Field(
        default=1000, description="Maximum random jitter added to each backoff in milliseconds"
    )
    upstream_min_delay_seconds: float = Field(
        default=0.25,
        description="Minimum delay between two requests to the same upstream host",
    )
    db_fallback_url_template: str = Field(
        default=(
            "https://mobile.bahn.de/bin/mobil/bhftafel.exe/dox"
            "?input={code}&boardType=dep&time=actual&productsFilter=1111111111&start=yes"
        ),
        description="Board URL used when the DB endpoint answers with its station search form",
    )

    # Rate limiting configuration
    board_rate_limit: int = Field(
        default=20, description="Board requests allowed per client within the window"
    )
    board_rate_window_seconds: float = Field(
        default=60.0, description="Sliding window for board rate limiting in seconds"
    )
    rate_limit_max_tracked_clients: int = Field(
        default=10_000, description="Maximum number of client IPs tracked by the board limiter"
    )
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute (all routes)",
    )

    # Display configuration
    auto_refresh_seconds: int = Field(
        default=60, description="Interval of the auto-refresh script injected into boards"
    )
    error_refresh_seconds: int = Field(
        default=30, description="Auto-refresh interval of upstream error pages"
    )
    search_result_limit: int = Field(
        default=10, description="Maximum number of results of /stations/search"
    )
    suggestion_limit: int = Field(
        default=5, description="Maximum number of suggestions for an unknown station"
    )

    # TOML config file path (optional)
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with overrides and cleanup selectors",
    )

    @field_validator("fetch_max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """At least one attempt is always made."""
        if v < 1:
            raise ValueError("fetch_max_retries must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file, updating settings found in known sections."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, keys in _TOML_SECTIONS.items():
            values = toml_data.get(section, {})
            if not isinstance(values, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for key in keys:
                if key in values:
                    # validate_assignment runs the field validators here
                    setattr(self, key, values[key])

        return toml_data

    def get_cleanup_overrides(self) -> dict[str, list[str]]:
        """Extra hidden selectors per provider from the TOML ``[cleanup]`` table.

        Example::

            [cleanup]
            NS = [".ns-banner"]
            all = [".survey-popup"]
        """
        toml_data = self._load_toml_data()
        cleanup = toml_data.get("cleanup", {})
        if not isinstance(cleanup, dict):
            raise ValueError("TOML config 'cleanup' must be a table")

        result: dict[str, list[str]] = {}
        for provider, selectors in cleanup.items():
            if not isinstance(selectors, list) or not all(isinstance(s, str) for s in selectors):
                raise ValueError(f"TOML cleanup entry '{provider}' must be a list of selectors")
            result[provider] = selectors
        return result
