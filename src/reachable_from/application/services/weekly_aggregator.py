"""Folds the daily record sets into one deduplicated, frequency-annotated result."""

import logging
from collections import Counter
from collections.abc import Sequence

from reachable_from.domain.models import ReachabilityRecord

logger = logging.getLogger(__name__)


def daily_frequencies(day: Sequence[ReachabilityRecord]) -> list[tuple[str, int]]:
    """How often each station id occurs within one day's records."""
    return list(Counter(record.id for record in day).items())


def minimum_frequencies(days: Sequence[Sequence[ReachabilityRecord]]) -> dict[str, int]:
    """Per station id, the smallest daily occurrence count over all days.

    Days on which a station does not occur are not counted as zero.
    """
    pairs: list[tuple[str, int]] = []
    seen: set[tuple[str, int]] = set()
    for day in days:
        for pair in daily_frequencies(day):
            if pair not in seen:
                seen.add(pair)
                pairs.append(pair)

    frequencies: dict[str, int] = {}
    for station_id, count in sorted(pairs, key=lambda pair: pair[1]):
        frequencies.setdefault(station_id, count)
    return frequencies


class WeeklyAggregator:
    """Merges a week of daily records into one record per destination."""

    def aggregate(
        self, days: Sequence[Sequence[ReachabilityRecord]]
    ) -> list[ReachabilityRecord]:
        """Keep the fastest record per station and attach its frequency.

        The frequency is the *least* frequent day's count, not a sum or an
        average. Callers rely on this.
        """
        frequencies = minimum_frequencies(days)

        merged = [record for day in days for record in day]
        fastest: dict[str, ReachabilityRecord] = {}
        for record in sorted(merged, key=lambda r: r.duration):
            fastest.setdefault(record.id, record)

        result = [
            record.model_copy(update={"frequency": frequencies.get(record.id, 0)})
            for record in fastest.values()
        ]
        logger.debug(f"Aggregated {len(merged)} records into {len(result)} destinations")
        return result
