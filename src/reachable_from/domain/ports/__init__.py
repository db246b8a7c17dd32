"""Ports (interfaces) for the ports-and-adapters architecture."""

from reachable_from.domain.ports.departure_source import DepartureSource
from reachable_from.domain.ports.reachability_service import ReachabilityService

__all__ = [
    "DepartureSource",
    "ReachabilityService",
]
