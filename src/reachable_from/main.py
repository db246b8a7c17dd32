"""Main entry point for the reachable-from web service."""

import asyncio
import logging
import sys

import aiohttp
import uvicorn

from reachable_from.adapters.config import AppConfig
from reachable_from.adapters.web import create_app
from reachable_from.composition import build_reachability_service

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config.log_level)

    try:
        config.get_filter_rules()
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid filter configuration: {e}")
        sys.exit(1)

    # One session for the lifetime of the server, shared by all requests
    async with aiohttp.ClientSession() as session:
        service = build_reachability_service(config, session=session)
        app = create_app(service, config)

        server = uvicorn.Server(
            uvicorn.Config(app, host=config.host, port=config.port, log_level="info")
        )
        logger.info(f"Serving reachability on {config.host}:{config.port}")
        await server.serve()


def run() -> None:
    """Synchronous entry point for the server command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
