"""Decides which departures count as eligible trains."""

from reachable_from.domain.models import Departure, FilterRules


class DepartureFilter:
    """Pure predicate over departures, driven by configurable :class:`FilterRules`."""

    def __init__(self, rules: FilterRules | None = None) -> None:
        self._rules = rules or FilterRules()

    @property
    def rules(self) -> FilterRules:
        return self._rules

    def is_train(self, departure: Departure) -> bool:
        """Base rule: a train by mode whose name doesn't look like a bus."""
        if departure.line.mode != "train":
            return False
        name_head = (departure.line.name or "")[:3].lower()
        return not any(name_head.startswith(p.lower()) for p in self._rules.bus_name_prefixes)

    def is_eligible(self, departure: Departure, local_only: bool = False) -> bool:
        """Check whether a departure should be considered for reachability."""
        if not self.is_train(departure):
            return False
        if not local_only:
            return True

        # Long-distance services misclassified as regional
        name = departure.line.name or ""
        if any(name.startswith(p) for p in self._rules.local_excluded_name_prefixes):
            return False
        operator = departure.line.operator
        return not (operator and operator.name in self._rules.local_excluded_operators)
