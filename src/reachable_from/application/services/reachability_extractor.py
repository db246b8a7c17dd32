"""Turns one departure's downstream stopovers into reachability records."""

import logging
from dataclasses import asdict
from zoneinfo import ZoneInfo

from reachable_from.domain.links import build_calendar_url, build_db_url
from reachable_from.domain.models import Departure, ReachabilityRecord, Stopover

logger = logging.getLogger(__name__)

# The data source includes some broken trains which run for several weeks.
# Longest real services are below this, see
# https://en.wikipedia.org/wiki/Longest_train_services#Top_50_train_services,_by_distance
MAXIMUM_DURATION_IN_HOURS = 210

DB_DATE_FORMAT = "%d.%m.%y"


class ReachabilityExtractor:
    """Extracts the stations reachable from the origin on a single train."""

    def __init__(
        self,
        timezone: str = "Europe/Berlin",
        maximum_duration_hours: float = MAXIMUM_DURATION_IN_HOURS,
    ) -> None:
        self._timezone = ZoneInfo(timezone)
        self._maximum_duration_hours = maximum_duration_hours

    @staticmethod
    def downstream_stopovers(
        departure: Departure, origin_station_id: str
    ) -> list[Stopover]:
        """Return the trailing stopovers after the last origin (or id-less) stop."""
        boundary = {origin_station_id, None}
        downstream: list[Stopover] = []
        for stopover in reversed(departure.next_stopovers):
            stop_id = stopover.stop.id if stopover.stop else None
            if stop_id in boundary:
                break
            downstream.append(stopover)
        downstream.reverse()
        return downstream

    def duration_minutes(self, departure: Departure, stopover: Stopover) -> float | None:
        """Travel time in minutes, or ``None`` if missing or outside the practical range."""
        if departure.when is None or stopover.arrival is None:
            return None
        duration = (stopover.arrival - departure.when).total_seconds() / 60
        if duration <= 0 or duration / 60 > self._maximum_duration_hours:
            return None
        return duration

    def extract(self, departure: Departure, origin_station_id: str) -> list[ReachabilityRecord]:
        """Build records (without frequency) for every valid downstream stopover."""
        stopovers = self.downstream_stopovers(departure, origin_station_id)
        if not stopovers:
            return []

        day = (
            departure.when.astimezone(self._timezone).strftime(DB_DATE_FORMAT)
            if departure.when
            else ""
        )
        line = departure.line
        # TODO: the train's first stop may lie on the previous day, in which case
        # the DB search links point at the wrong date
        db_url_german = build_db_url(departure.stop_id, line.fahrt_nr, line.product, day, "de")
        db_url_english = build_db_url(departure.stop_id, line.fahrt_nr, line.product, day, "en")

        records = []
        for stopover in stopovers:
            duration = self.duration_minutes(departure, stopover)
            stop = stopover.stop
            if duration is None or stop is None or stop.id is None:
                name = stop.name if stop else "?"
                logger.debug(f"Dropping {name} on {line.name}: invalid duration")
                continue
            location = (
                {k: v for k, v in asdict(stop.location).items() if v is not None}
                if stop.location
                else None
            )
            records.append(
                ReachabilityRecord(
                    id=stop.id,
                    name=stop.name,
                    location=location,
                    duration=duration,
                    db_url_german=db_url_german,
                    db_url_english=db_url_english,
                    calendar_url=build_calendar_url(origin_station_id, stop.id),
                )
            )
        return records
