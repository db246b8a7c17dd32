"""Runs the daily computation over a week of future days."""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, time, timedelta
from zoneinfo import ZoneInfo

from reachable_from.application.services.daily_reachability import DailyReachabilityComputer
from reachable_from.domain.models import ReachabilityRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_DAYS = 4


def _utc_now() -> datetime:
    return datetime.now(UTC)


class WeeklyScheduler:
    """Fans out :class:`DailyReachabilityComputer` over consecutive days.

    At most ``max_concurrent_days`` fetches are in flight to respect the
    upstream rate limits. Results keep chronological order. The first failure
    cancels the remaining days and is re-raised as is.
    """

    def __init__(
        self,
        daily_computer: DailyReachabilityComputer,
        timezone: str = "Europe/Berlin",
        days_ahead: int = 7,
        days_to_probe: int = 7,
        max_concurrent_days: int = DEFAULT_MAX_CONCURRENT_DAYS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._daily_computer = daily_computer
        self._timezone = ZoneInfo(timezone)
        self._days_ahead = days_ahead
        self._days_to_probe = days_to_probe
        self._max_concurrent_days = max_concurrent_days
        self._clock = clock

    def target_dates(self) -> list[datetime]:
        """Local midnights of the probed days, starting ``days_ahead`` days from today."""
        today = self._clock().astimezone(self._timezone).date()
        first_day = today + timedelta(days=self._days_ahead)
        return [
            datetime.combine(first_day + timedelta(days=offset), time(0), tzinfo=self._timezone)
            for offset in range(self._days_to_probe)
        ]

    async def run(
        self, station_id: str, local_only: bool = False
    ) -> list[list[ReachabilityRecord]]:
        """Compute every target day; returns one record list per day, in date order."""
        semaphore = asyncio.Semaphore(self._max_concurrent_days)

        async def compute(date: datetime) -> list[ReachabilityRecord]:
            async with semaphore:
                return await self._daily_computer.compute_day(date, station_id, local_only)

        dates = self.target_dates()
        logger.info(
            f"Computing reachability for {station_id} from {dates[0].date()} to {dates[-1].date()} "
            f"(local_only={local_only})"
        )
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(compute(date)) for date in dates]
        except ExceptionGroup as failures:
            # Remaining days are cancelled and awaited by the group before this point.
            raise failures.exceptions[0] from None
        return [task.result() for task in tasks]
