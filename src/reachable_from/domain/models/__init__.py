"""Domain models for direct-train reachability."""

from reachable_from.domain.models.departure import (
    Departure,
    Line,
    Location,
    Operator,
    Stop,
    Stopover,
)
from reachable_from.domain.models.error_details import ErrorDetails
from reachable_from.domain.models.filter_rules import FilterRules
from reachable_from.domain.models.reachability_record import ReachabilityRecord

__all__ = [
    "Departure",
    "ErrorDetails",
    "FilterRules",
    "Line",
    "Location",
    "Operator",
    "ReachabilityRecord",
    "Stop",
    "Stopover",
]
