"""Per-client rate limiting middleware for Starlette using throttled-py."""

import logging
import math
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0
DEFAULT_FETCHES_PER_MINUTE = 70
DEFAULT_EXEMPT_PATHS = ("/healthz",)


def extract_client_ip(request: Request) -> str:
    """Client IP, preferring the first address in X-Forwarded-For."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket per client IP, measured in upstream day fetches.

    One reachability query fans out into ``fetches_per_query`` upstream requests,
    so it takes that many tokens. Paths in ``exempt_paths`` are not charged.
    """

    def __init__(
        self,
        app: Callable,
        fetches_per_minute: int = DEFAULT_FETCHES_PER_MINUTE,
        fetches_per_query: int = 7,
        exempt_paths: Iterable[str] = DEFAULT_EXEMPT_PATHS,
    ) -> None:
        super().__init__(app)
        self.fetches_per_minute = fetches_per_minute
        self.fetches_per_query = fetches_per_query
        self.exempt_paths = frozenset(exempt_paths)
        self.quota = rate_limiter.per_min(fetches_per_minute, burst=fetches_per_minute)
        self.rate_limiter_store = store.MemoryStore()
        logger.info(
            f"Rate limiting enabled: {fetches_per_minute} upstream fetches per minute per IP, "
            f"{fetches_per_query} per query"
        )

    @staticmethod
    def _extract_retry_after(result: Any) -> float:
        """Retry-After seconds from a throttled-py result."""
        state = getattr(result, "state", None)
        if state is not None and hasattr(state, "retry_after"):
            return float(state.retry_after)
        if hasattr(result, "retry_after"):
            return float(result.retry_after)
        return DEFAULT_RETRY_AFTER_SECONDS

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the query with 429 once the client cannot pay for its upstream fetches."""
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        throttle = Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.rate_limiter_store,
        )

        result = throttle.limit(cost=self.fetches_per_query)
        if result.limited:
            retry_after = self._extract_retry_after(result)
            logger.warning(f"Rate limit exceeded for IP {client_ip}, retry after {retry_after}s")
            return JSONResponse(
                {"error": True, "message": "rate limit exceeded"},
                status_code=429,
                headers={"Retry-After": str(max(1, math.ceil(retry_after)))},
            )

        response: Response = await call_next(request)
        return response
