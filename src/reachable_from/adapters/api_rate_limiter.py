"""Spacing for outgoing requests to the timetable API.

The weekly computation fires several day fetches at once; this keeps a
minimum gap between any two of them that hit the same upstream.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import ClassVar

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Enforces a minimum delay between consecutive requests to one upstream API."""

    # Shared limiters keyed by upstream name, so every client of an API waits in one line
    _instances: ClassVar[dict[str, ApiRateLimiter]] = {}
    _registry_lock: ClassVar[asyncio.Lock | None] = None

    def __init__(self, api_name: str, min_delay_seconds: float = 1.0) -> None:
        """Create a limiter.

        Args:
            api_name: Upstream name, used as registry key and in log messages.
            min_delay_seconds: Minimum gap between the starts of two requests.
        """
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._last_request_time: float = 0.0
        self._lock = asyncio.Lock()

    @classmethod
    async def get_instance(cls, api_name: str, min_delay_seconds: float = 1.0) -> ApiRateLimiter:
        """Return the shared limiter for ``api_name``, creating it on first use.

        ``min_delay_seconds`` only applies when the limiter is created.
        """
        if cls._registry_lock is None:
            cls._registry_lock = asyncio.Lock()

        async with cls._registry_lock:
            limiter = cls._instances.get(api_name)
            if limiter is None:
                limiter = cls(api_name, min_delay_seconds)
                cls._instances[api_name] = limiter
                logger.info(f"Rate limiting {api_name} to one request every {min_delay_seconds}s")
            return limiter

    async def acquire(self) -> None:
        """Wait until the minimum delay since the previous request has passed."""
        async with self._lock:
            wait_time = self.min_delay_seconds - (time.monotonic() - self._last_request_time)
            if wait_time > 0:
                logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                await asyncio.sleep(wait_time)
            self._last_request_time = time.monotonic()

    async def __aenter__(self) -> ApiRateLimiter:
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: Exception | None, _exc_tb: object
    ) -> None:
        return None
