"""Adapters layer - external system integrations."""

from reachable_from.adapters.config import AppConfig
from reachable_from.adapters.db_api import DbDepartureSource

__all__ = [
    "AppConfig",
    "DbDepartureSource",
]
