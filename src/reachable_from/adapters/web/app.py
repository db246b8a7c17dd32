"""Starlette HTTP boundary for the reachability service."""

import logging
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from reachable_from.adapters.web.rate_limit_middleware import RateLimitMiddleware
from reachable_from.domain.station_codes import is_uic_location_code

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from reachable_from.adapters.config import AppConfig
    from reachable_from.domain.ports import ReachabilityService

_TRUTHY = {"true", "t", "yes", "y", "on", "1"}


def parse_boolean(value: str | None) -> bool:
    """Interpret a query string flag; anything not obviously true is false."""
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": True, "message": message}, status_code=status_code)


def create_app(
    service: "ReachabilityService", config: "AppConfig | None" = None
) -> Starlette:
    """Build the ASGI app.

    Args:
        service: Computes the reachable destinations.
        config: Application configuration; rate limiting is skipped without one.

    Raises:
        ValueError: If the per-client fetch budget cannot pay for a single query.
    """

    async def reachable_from(request: Request) -> Response:
        station_id = request.path_params.get("id")
        if not station_id or not is_uic_location_code(station_id):
            return error_response("id must be a uic station code", 400)
        local_trains_only = parse_boolean(request.query_params.get("localTrainsOnly"))

        try:
            records = await service.reachable_from(station_id, local_trains_only)
        except Exception:
            logger.exception(f"Failed to compute reachability for {station_id}")
            return error_response("internal error", 500)

        return JSONResponse([record.to_json() for record in records])

    async def healthz(_request: Request) -> Response:
        return PlainTextResponse("ok")

    middleware = []
    if config is not None:
        if config.rate_limit_fetches_per_minute < config.days_to_probe:
            raise ValueError(
                "rate_limit_fetches_per_minute must cover at least one query "
                f"({config.days_to_probe} fetches)"
            )
        middleware.append(
            Middleware(
                RateLimitMiddleware,
                fetches_per_minute=config.rate_limit_fetches_per_minute,
                fetches_per_query=config.days_to_probe,
            )
        )

    return Starlette(
        routes=[
            Route("/healthz", healthz, methods=["GET"]),
            Route("/{id}", reachable_from, methods=["GET"]),
        ],
        middleware=middleware,
    )
