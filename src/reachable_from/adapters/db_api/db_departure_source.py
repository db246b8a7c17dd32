"""DB departure source adapter using the db-rest API.

API Documentation: https://v6.db.transport.rest/api.html
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from reachable_from.adapters.db_api.constants import DB_BASE_URL
from reachable_from.adapters.db_api.departure_parser import DepartureParser
from reachable_from.adapters.db_api.http_client import DbHttpClient
from reachable_from.domain.models import Departure
from reachable_from.domain.ports import DepartureSource

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class DbDepartureSource(DepartureSource):
    """Adapter providing a day's worth of departures from the DB API."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str | None = None,
        timeout_seconds: float = 30.0,
        min_delay_seconds: float = 0.6,
        results: int = 1000,
        http_client: DbHttpClient | None = None,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession used for all requests.
            base_url: db-rest instance, defaults to v6.db.transport.rest.
            timeout_seconds: Total timeout per request.
            min_delay_seconds: Minimum gap between requests to the same instance.
            results: Maximum number of departures per request.
            http_client: Pre-built client, mainly for tests.
        """
        if http_client is None:
            http_client = DbHttpClient(
                session,
                base_url=base_url or DB_BASE_URL,
                timeout_seconds=timeout_seconds,
                min_delay_seconds=min_delay_seconds,
                results=results,
            )
        self._http_client = http_client

    async def get_departures(
        self,
        station_id: str,
        when: datetime,
        duration_minutes: int,
        products: dict[str, bool],
        stopovers: bool = True,
        remarks: bool = False,
    ) -> list[Departure]:
        """Get departures for a DB station within the given window."""
        departures_data = await self._http_client.fetch_departures(
            station_id,
            when=when,
            duration=duration_minutes,
            products=products,
            stopovers=stopovers,
            remarks=remarks,
        )
        departures = DepartureParser.parse_departures(departures_data)
        logger.debug(
            f"Parsed {len(departures)} of {len(departures_data)} departures for {station_id}"
        )
        return departures
