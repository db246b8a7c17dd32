"""Parser for DB API departure responses (db-rest / FPTF format)."""

import logging
from datetime import UTC, datetime
from typing import Any

from reachable_from.domain.models import (
    Departure,
    Line,
    Location,
    Operator,
    Stop,
    Stopover,
)

logger = logging.getLogger(__name__)


class DepartureParser:
    """Parses db-rest departure dictionaries into :class:`Departure` objects."""

    @staticmethod
    def parse_departures(departures: list[Any]) -> list[Departure]:
        """Parse every departure, skipping entries without a usable line."""
        results = []
        for dep in departures:
            departure = DepartureParser.parse_departure(dep)
            if departure is not None:
                results.append(departure)
        return results

    @staticmethod
    def parse_departure(dep: Any) -> Departure | None:
        """Parse a single departure, or return ``None`` if it has no line.

        Only realtime ``when`` and ``arrival`` are read. db-rest sends them as null
        for cancelled runs and stops, which then never count as reachable.
        """
        if not isinstance(dep, dict):
            logger.warning(f"Skipping departure of unexpected type {type(dep).__name__}")
            return None

        line = DepartureParser._parse_line(dep.get("line"))
        if line is None:
            logger.warning(f"Skipping departure without line: {dep.get('tripId', '?')}")
            return None

        stop = dep.get("stop") or {}
        return Departure(
            line=line,
            when=DepartureParser._parse_time(dep.get("when")),
            stop_id=str(stop.get("id", "")),
            next_stopovers=tuple(
                DepartureParser._parse_stopover(s) for s in dep.get("nextStopovers") or []
            ),
        )

    @staticmethod
    def _parse_line(line_data: Any) -> Line | None:
        if not isinstance(line_data, dict):
            return None
        operator_data = line_data.get("operator")
        operator = (
            Operator(id=operator_data.get("id"), name=operator_data.get("name") or "")
            if isinstance(operator_data, dict)
            else None
        )
        return Line(
            mode=line_data.get("mode") or "",
            name=line_data.get("name") or "",
            product=line_data.get("product") or "",
            fahrt_nr=str(line_data.get("fahrtNr") or ""),
            operator=operator,
        )

    @staticmethod
    def _parse_stopover(stopover: Any) -> Stopover:
        if not isinstance(stopover, dict):
            return Stopover(stop=None, arrival=None)
        return Stopover(
            stop=DepartureParser._parse_stop(stopover.get("stop")),
            arrival=DepartureParser._parse_time(stopover.get("arrival")),
        )

    @staticmethod
    def _parse_stop(stop_data: Any) -> Stop | None:
        if not isinstance(stop_data, dict):
            return None
        stop_id = stop_data.get("id")
        return Stop(
            id=str(stop_id) if stop_id is not None else None,
            name=stop_data.get("name") or "",
            location=DepartureParser._parse_location(stop_data.get("location")),
        )

    @staticmethod
    def _parse_location(location_data: Any) -> Location | None:
        if not isinstance(location_data, dict):
            return None
        latitude = location_data.get("latitude")
        longitude = location_data.get("longitude")
        if latitude is None or longitude is None:
            return None
        return Location(
            latitude=float(latitude),
            longitude=float(longitude),
            type=location_data.get("type") or "location",
            id=location_data.get("id"),
        )

    @staticmethod
    def _parse_time(time_str: Any) -> datetime | None:
        """Parse an ISO 8601 time string into an aware datetime."""
        if not time_str or not isinstance(time_str, str):
            return None
        try:
            parsed = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Could not parse time '{time_str}'")
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
