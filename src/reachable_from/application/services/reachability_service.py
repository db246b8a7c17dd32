"""Use case: destinations reachable by a single direct train."""

import logging

from reachable_from.application.services.weekly_aggregator import WeeklyAggregator
from reachable_from.application.services.weekly_scheduler import WeeklyScheduler
from reachable_from.domain.models import ReachabilityRecord

logger = logging.getLogger(__name__)


class ReachableFromService:
    """Runs the weekly scheduler and aggregates its results."""

    def __init__(
        self, scheduler: WeeklyScheduler, aggregator: WeeklyAggregator | None = None
    ) -> None:
        self._scheduler = scheduler
        self._aggregator = aggregator or WeeklyAggregator()

    async def reachable_from(
        self, station_id: str, local_trains_only: bool = False
    ) -> list[ReachabilityRecord]:
        """Return the weekly result for ``station_id``, sorted by duration."""
        days = await self._scheduler.run(station_id, local_trains_only)
        result = self._aggregator.aggregate(days)
        logger.info(f"{station_id}: {len(result)} destinations reachable directly")
        return result
