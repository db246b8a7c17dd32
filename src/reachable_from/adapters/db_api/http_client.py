"""HTTP client for DB API requests.

Uses the db-rest API.
API Documentation: https://v6.db.transport.rest/api.html
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import aiohttp

from reachable_from.adapters.api_rate_limiter import ApiRateLimiter
from reachable_from.adapters.api_request_logger import log_api_request
from reachable_from.adapters.db_api.constants import (
    DB_API_NAME,
    DB_BASE_URL,
    DEFAULT_HEADERS,
    DEPARTURES_PATH,
    KNOWN_PRODUCTS,
)
from reachable_from.domain.errors import DepartureSourceError
from reachable_from.domain.models import ErrorDetails

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

# DB API rate limit is 100 requests/minute
DB_API_MIN_DELAY_SECONDS = 0.6


def _flag(value: bool) -> str:
    return "true" if value else "false"


class DbHttpClient:
    """HTTP client for the db-rest departures endpoint.

    Failures are raised as :class:`DepartureSourceError`; nothing is retried here.
    """

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = DB_BASE_URL,
        timeout_seconds: float = 30.0,
        min_delay_seconds: float = DB_API_MIN_DELAY_SECONDS,
        results: int = 1000,
    ) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._min_delay_seconds = min_delay_seconds
        self._results = results
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        """Get the rate limiter shared by all clients of this API instance."""
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                f"{DB_API_NAME}:{self._base_url}", self._min_delay_seconds
            )
        return self._rate_limiter

    def build_departures_params(
        self,
        when: datetime,
        duration: int,
        products: dict[str, bool],
        stopovers: bool,
        remarks: bool,
    ) -> dict[str, str | int]:
        """Query parameters for the departures endpoint."""
        params: dict[str, str | int] = {
            "when": when.isoformat(),
            "duration": duration,
            "results": self._results,
            "stopovers": _flag(stopovers),
            "remarks": _flag(remarks),
        }
        for product, enabled in products.items():
            if product not in KNOWN_PRODUCTS:
                logger.warning(f"Ignoring unknown product flag '{product}'")
                continue
            params[product] = _flag(enabled)
        return params

    @staticmethod
    def _extract_departures(data: Any) -> list[dict[str, Any]] | None:
        """Extract the departures list; newer db-rest versions wrap it in an object."""
        if isinstance(data, dict):
            departures = data.get("departures")
            return departures if isinstance(departures, list) else None
        if isinstance(data, list):
            return data
        return None

    async def _raise_for_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log and raise for a non-200 response."""
        error_text = await response.text()
        error_body = error_text[:500] if error_text else "(empty response body)"
        retry_after = response.headers.get("Retry-After")
        extra_info = f" [Retry-After: {retry_after}]" if retry_after else ""
        logger.error(
            f"DB API returned status {response.status} for {url}: {error_body}{extra_info}"
        )
        raise DepartureSourceError(
            ErrorDetails(
                status_code=response.status,
                reason=f"DB API returned status {response.status}",
            )
        )

    async def fetch_departures(
        self,
        station_id: str,
        when: datetime,
        duration: int = 60,
        products: dict[str, bool] | None = None,
        stopovers: bool = True,
        remarks: bool = False,
    ) -> list[dict[str, Any]]:
        """Fetch raw departures from ``/stops/{id}/departures``.

        Args:
            station_id: Station ID (e.g., "8000105" for Frankfurt (Main) Hbf).
            when: Start of the window.
            duration: Window length in minutes.
            products: Product category flags.
            stopovers: Include the downstream stopovers of every departure.
            remarks: Include remarks.

        Returns:
            List of departure dictionaries in db-rest format.

        Raises:
            DepartureSourceError: On network errors, non-200 responses or malformed bodies.
        """
        url = f"{self._base_url}{DEPARTURES_PATH.format(station_id=station_id)}"
        params = self.build_departures_params(when, duration, products or {}, stopovers, remarks)

        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire()
        log_api_request("GET", url, params=params, headers=DEFAULT_HEADERS)

        try:
            async with self._session.get(
                url, params=params, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    await self._raise_for_error_response(response, url)
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.error(f"Error fetching DB departures for {url}: {e}")
            raise DepartureSourceError(
                ErrorDetails(reason=f"Error fetching departures for {station_id}: {e}")
            ) from e

        departures = self._extract_departures(data)
        if departures is None:
            logger.error(f"Unexpected DB API response shape for {url}: {type(data).__name__}")
            raise DepartureSourceError(
                ErrorDetails(status_code=200, reason="Malformed departures response")
            )
        return departures
