"""Tests for the departure eligibility filter."""

from datetime import UTC, datetime

import pytest

from reachable_from.application.services.departure_filter import DepartureFilter
from reachable_from.domain.models import Departure, FilterRules, Line, Operator


def _departure(
    name: str = "RE 1",
    mode: str = "train",
    product: str = "regional",
    operator: str | None = None,
) -> Departure:
    return Departure(
        line=Line(
            mode=mode,
            name=name,
            product=product,
            fahrt_nr="4711",
            operator=Operator(id=None, name=operator) if operator else None,
        ),
        when=datetime(2026, 10, 26, 8, 0, tzinfo=UTC),
        stop_id="8000105",
    )


class TestBaseEligibility:
    """Rules applied regardless of local-only mode."""

    @pytest.mark.parametrize("local_only", [False, True])
    def test_when_regional_train_then_eligible(self, local_only: bool) -> None:
        """Given a plain regional train, when filtering, then it is eligible."""
        assert DepartureFilter().is_eligible(_departure(), local_only) is True

    @pytest.mark.parametrize("name", ["Bus SEV", "BUS 42", "bus", "bUs RE1"])
    @pytest.mark.parametrize("local_only", [False, True])
    def test_when_name_starts_with_bus_then_rejected(self, name: str, local_only: bool) -> None:
        """Given a train-mode line named like a bus, when filtering, then it is rejected."""
        assert DepartureFilter().is_eligible(_departure(name=name), local_only) is False

    @pytest.mark.parametrize("mode", ["bus", "watercraft", "taxi", ""])
    @pytest.mark.parametrize("local_only", [False, True])
    def test_when_mode_is_not_train_then_rejected(self, mode: str, local_only: bool) -> None:
        """Given a non-train mode, when filtering, then it is rejected."""
        assert DepartureFilter().is_eligible(_departure(mode=mode), local_only) is False

    def test_when_name_only_contains_bus_later_then_eligible(self) -> None:
        """Given 'bus' beyond the first three characters, when filtering, then it is eligible."""
        assert DepartureFilter().is_eligible(_departure(name="RE Busenbach")) is True

    def test_when_name_is_empty_then_eligible(self) -> None:
        """Given a train without a name, when filtering, then it is still eligible."""
        assert DepartureFilter().is_eligible(_departure(name="")) is True


class TestLocalOnlyEligibility:
    """Extra exclusions for local-only mode."""

    def test_euronight_excluded_only_in_local_mode(self) -> None:
        """Given EN451, when filtering, then it is excluded only in local-only mode."""
        departure = _departure(name="EN451", product="regional")
        departure_filter = DepartureFilter()

        assert departure_filter.is_eligible(departure, local_only=True) is False
        assert departure_filter.is_eligible(departure, local_only=False) is True

    @pytest.mark.parametrize(
        "operator",
        ["European Sleeper", "FlixTrain", "Snälltåget", "Urlaubs-Express", "WESTbahn"],
    )
    def test_denylisted_operator_excluded_only_in_local_mode(self, operator: str) -> None:
        """Given a denylisted operator, when filtering, then it is excluded only in local-only mode."""
        departure = _departure(name="RE 99", operator=operator)
        departure_filter = DepartureFilter()

        assert departure_filter.is_eligible(departure, local_only=True) is False
        assert departure_filter.is_eligible(departure, local_only=False) is True

    def test_when_operator_not_denylisted_then_eligible(self) -> None:
        """Given a regular regional operator, when filtering local-only, then it is eligible."""
        departure = _departure(operator="DB Regio AG")

        assert DepartureFilter().is_eligible(departure, local_only=True) is True

    def test_operator_match_is_exact(self) -> None:
        """Given an operator name differing in case, when filtering local-only, then it is kept."""
        departure = _departure(operator="flixtrain")

        assert DepartureFilter().is_eligible(departure, local_only=True) is True


class TestConfigurableRules:
    """Filter behavior follows the injected rules."""

    def test_custom_operator_denylist(self) -> None:
        """Given a custom denylist, when filtering local-only, then only listed operators are dropped."""
        rules = FilterRules(local_excluded_operators=frozenset({"Example Rail"}))
        departure_filter = DepartureFilter(rules)

        assert departure_filter.is_eligible(_departure(operator="Example Rail"), True) is False
        assert departure_filter.is_eligible(_departure(operator="FlixTrain"), True) is True

    def test_custom_name_prefixes(self) -> None:
        """Given custom name prefixes, when filtering local-only, then those prefixes are dropped."""
        rules = FilterRules(local_excluded_name_prefixes=("NJ", "EN"))
        departure_filter = DepartureFilter(rules)

        assert departure_filter.is_eligible(_departure(name="NJ 40490"), True) is False
        assert departure_filter.is_eligible(_departure(name="RE 5"), True) is True
