"""Application services (use cases) for reachability."""

from reachable_from.application.services.daily_reachability import DailyReachabilityComputer
from reachable_from.application.services.departure_filter import DepartureFilter
from reachable_from.application.services.reachability_extractor import ReachabilityExtractor
from reachable_from.application.services.reachability_service import ReachableFromService
from reachable_from.application.services.weekly_aggregator import WeeklyAggregator
from reachable_from.application.services.weekly_scheduler import WeeklyScheduler

__all__ = [
    "DailyReachabilityComputer",
    "DepartureFilter",
    "ReachabilityExtractor",
    "ReachableFromService",
    "WeeklyAggregator",
    "WeeklyScheduler",
]
