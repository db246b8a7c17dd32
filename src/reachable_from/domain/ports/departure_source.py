"""Departure source port."""

from datetime import datetime
from typing import Protocol

from reachable_from.domain.models.departure import Departure


class DepartureSource(Protocol):
    """Port for retrieving all departures of a station within a time window."""

    async def get_departures(
        self,
        station_id: str,
        when: datetime,
        duration_minutes: int,
        products: dict[str, bool],
        stopovers: bool = True,
        remarks: bool = False,
    ) -> list[Departure]:
        """Get departures leaving ``station_id`` between ``when`` and ``when + duration_minutes``.

        Raises:
            DepartureSourceError: If the upstream source fails.
        """
        ...
