"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reachable_from.domain.models import FilterRules


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=3000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root log level")

    # DB API configuration
    db_api_base_url: str = Field(
        default="https://v6.db.transport.rest",
        description="Base URL of the db-rest (transport.rest) instance",
    )
    db_api_timeout_seconds: float = Field(
        default=30.0, description="Total timeout for a single departures request in seconds"
    )
    db_api_min_delay_seconds: float = Field(
        default=0.6,
        description="Minimum delay between DB API requests (rate limit is 100/min)",
    )
    db_api_results: int = Field(
        default=1000, description="Maximum number of departures requested per day"
    )

    # Reachability computation
    timezone: str = Field(
        default="Europe/Berlin",
        description="Timezone the probed calendar days are computed in (IANA name)",
    )
    days_ahead: int = Field(default=7, description="Days between today and the first probed day")
    days_to_probe: int = Field(default=7, description="Number of consecutive days to probe")
    max_concurrent_days: int = Field(
        default=4, description="Maximum number of day fetches in flight at once"
    )
    maximum_duration_hours: float = Field(
        default=210, description="Trips longer than this are treated as broken data"
    )

    # Rate limiting configuration; a query costs days_to_probe fetches
    rate_limit_fetches_per_minute: int = Field(
        default=70,
        description="Upstream day fetches a single IP address may trigger per minute",
    )

    # Optional TOML file with [filters] overrides
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with departure filter rules",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator("max_concurrent_days", "days_to_probe")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts are at least one."""
        if v < 1:
            raise ValueError("max_concurrent_days and days_to_probe must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module knows."""
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v.upper()

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file, or return an empty table if none is set."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_filter_rules(self) -> FilterRules:
        """Build the departure filter rules, applying overrides from the [filters] table."""
        filters = self._load_toml_data().get("filters", {})
        if not isinstance(filters, dict):
            raise ValueError("TOML config 'filters' must be a table")

        defaults = FilterRules()
        for key in (
            "bus_name_prefixes",
            "local_excluded_name_prefixes",
            "local_excluded_operators",
        ):
            if key in filters and not (
                isinstance(filters[key], list) and all(isinstance(x, str) for x in filters[key])
            ):
                raise ValueError(f"TOML config 'filters.{key}' must be a list of strings")

        return FilterRules(
            bus_name_prefixes=tuple(filters.get("bus_name_prefixes", defaults.bus_name_prefixes)),
            local_excluded_name_prefixes=tuple(
                filters.get("local_excluded_name_prefixes", defaults.local_excluded_name_prefixes)
            ),
            local_excluded_operators=frozenset(
                filters.get("local_excluded_operators", defaults.local_excluded_operators)
            ),
        )
