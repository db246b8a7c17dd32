"""Reachable stations for one origin on one day."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from reachable_from.application.services.departure_filter import DepartureFilter
from reachable_from.application.services.reachability_extractor import ReachabilityExtractor
from reachable_from.domain.models import ReachabilityRecord

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from reachable_from.domain.ports import DepartureSource

DAY_DURATION_MINUTES = 24 * 60


def products_for(local_only: bool) -> dict[str, bool]:
    """Product categories to request from the source.

    Long-distance products are dropped in local-only mode; buses, ferries,
    subways, trams and taxis are never requested.
    """
    return {
        "nationalExpress": not local_only,
        "national": not local_only,
        "regionalExpress": True,
        "regional": True,
        "suburban": True,
        "bus": False,
        "ferry": False,
        "subway": False,
        "tram": False,
        "taxi": False,
    }


class DailyReachabilityComputer:
    """Fetches a day of departures and extracts every reachable stop."""

    def __init__(
        self,
        departure_source: "DepartureSource",
        departure_filter: DepartureFilter | None = None,
        extractor: ReachabilityExtractor | None = None,
    ) -> None:
        self._departure_source = departure_source
        self._filter = departure_filter or DepartureFilter()
        self._extractor = extractor or ReachabilityExtractor()

    async def compute_day(
        self, date: datetime, station_id: str, local_only: bool = False
    ) -> list[ReachabilityRecord]:
        """Return the day's records; may contain the same station several times.

        Upstream failures propagate unchanged.
        """
        departures = await self._departure_source.get_departures(
            station_id,
            when=date,
            duration_minutes=DAY_DURATION_MINUTES,
            products=products_for(local_only),
            stopovers=True,
            remarks=False,
        )

        eligible = [d for d in departures if self._filter.is_eligible(d, local_only)]
        records: list[ReachabilityRecord] = []
        for departure in eligible:
            records.extend(self._extractor.extract(departure, station_id))

        logger.debug(
            f"{station_id} on {date.date().isoformat()}: {len(departures)} departures, "
            f"{len(eligible)} eligible, {len(records)} reachable stopovers"
        )
        return records
