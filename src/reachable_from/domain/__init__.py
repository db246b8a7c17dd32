"""Domain layer - core models, ports and pure helpers."""

from reachable_from.domain.models import (
    Departure,
    FilterRules,
    ReachabilityRecord,
)
from reachable_from.domain.ports import (
    DepartureSource,
    ReachabilityService,
)

__all__ = [
    "Departure",
    "DepartureSource",
    "FilterRules",
    "ReachabilityRecord",
    "ReachabilityService",
]
