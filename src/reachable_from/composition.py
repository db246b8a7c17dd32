"""Wires configuration, the DB adapter and the application services together."""

from typing import TYPE_CHECKING

from reachable_from.adapters.config import AppConfig
from reachable_from.adapters.db_api import DbDepartureSource
from reachable_from.application.services import (
    DailyReachabilityComputer,
    DepartureFilter,
    ReachabilityExtractor,
    ReachableFromService,
    WeeklyAggregator,
    WeeklyScheduler,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from reachable_from.domain.ports import DepartureSource


def build_reachability_service(
    config: AppConfig,
    session: "ClientSession | None" = None,
    departure_source: "DepartureSource | None" = None,
) -> ReachableFromService:
    """Build the service; pass ``departure_source`` to bypass the DB API."""
    if departure_source is None:
        if session is None:
            raise ValueError("either session or departure_source is required")
        departure_source = DbDepartureSource(
            session,
            base_url=config.db_api_base_url,
            timeout_seconds=config.db_api_timeout_seconds,
            min_delay_seconds=config.db_api_min_delay_seconds,
            results=config.db_api_results,
        )

    daily_computer = DailyReachabilityComputer(
        departure_source,
        departure_filter=DepartureFilter(config.get_filter_rules()),
        extractor=ReachabilityExtractor(
            timezone=config.timezone,
            maximum_duration_hours=config.maximum_duration_hours,
        ),
    )
    scheduler = WeeklyScheduler(
        daily_computer,
        timezone=config.timezone,
        days_ahead=config.days_ahead,
        days_to_probe=config.days_to_probe,
        max_concurrent_days=config.max_concurrent_days,
    )
    return ReachableFromService(scheduler, WeeklyAggregator())
