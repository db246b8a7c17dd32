"""DB API adapters for Deutsche Bahn."""

from reachable_from.adapters.db_api.db_departure_source import DbDepartureSource
from reachable_from.adapters.db_api.http_client import DbHttpClient

__all__ = ["DbDepartureSource", "DbHttpClient"]
