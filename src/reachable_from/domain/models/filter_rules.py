"""Heuristic rules deciding which departures count as eligible trains."""

from dataclasses import dataclass

DEFAULT_BUS_NAME_PREFIXES: tuple[str, ...] = ("bus",)

# EuroNight services are sometimes misclassified as regional trains.
DEFAULT_LOCAL_EXCLUDED_NAME_PREFIXES: tuple[str, ...] = ("EN",)

# Privately operated trains that are wrongly categorized as regional transit.
# Known to be incomplete.
DEFAULT_LOCAL_EXCLUDED_OPERATORS: tuple[str, ...] = (
    "European Sleeper",
    "FlixTrain",
    "Snälltåget",
    "Urlaubs-Express",
    "WESTbahn",
)


@dataclass(frozen=True)
class FilterRules:
    """Name prefixes and operator names used by the departure filter."""

    bus_name_prefixes: tuple[str, ...] = DEFAULT_BUS_NAME_PREFIXES
    local_excluded_name_prefixes: tuple[str, ...] = DEFAULT_LOCAL_EXCLUDED_NAME_PREFIXES
    local_excluded_operators: frozenset[str] = frozenset(DEFAULT_LOCAL_EXCLUDED_OPERATORS)
