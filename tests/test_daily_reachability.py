"""Tests for the per-day reachability computation."""

from datetime import UTC, datetime, timedelta

import pytest

from reachable_from.application.services.daily_reachability import (
    DAY_DURATION_MINUTES,
    DailyReachabilityComputer,
    products_for,
)
from reachable_from.domain.errors import DepartureSourceError
from reachable_from.domain.models import Departure, ErrorDetails, Line, Stop, Stopover

ORIGIN = "8000105"
DAY = datetime(2026, 10, 26, tzinfo=UTC)


def _departure(name: str, mode: str = "train", *stops: tuple[str, int]) -> Departure:
    when = DAY + timedelta(hours=8)
    return Departure(
        line=Line(mode=mode, name=name, product="regional", fahrt_nr="1"),
        when=when,
        stop_id=ORIGIN,
        next_stopovers=(Stopover(stop=Stop(id=ORIGIN, name="Origin"), arrival=None),)
        + tuple(
            Stopover(stop=Stop(id=sid, name=sid), arrival=when + timedelta(minutes=m))
            for sid, m in stops
        ),
    )


class FakeDepartureSource:
    """Departure source returning canned departures and recording queries."""

    def __init__(self, departures: list[Departure] | None = None, error: Exception | None = None):
        self.departures = departures or []
        self.error = error
        self.calls: list[dict] = []

    async def get_departures(
        self,
        station_id: str,
        when: datetime,
        duration_minutes: int,
        products: dict[str, bool],
        stopovers: bool = True,
        remarks: bool = False,
    ) -> list[Departure]:
        self.calls.append(
            {
                "station_id": station_id,
                "when": when,
                "duration_minutes": duration_minutes,
                "products": products,
                "stopovers": stopovers,
                "remarks": remarks,
            }
        )
        if self.error:
            raise self.error
        return self.departures


def test_products_for_local_only() -> None:
    """Given local-only mode, when choosing products, then national services are suppressed."""
    products = products_for(True)

    assert products["nationalExpress"] is False
    assert products["national"] is False
    assert products["regionalExpress"] is True
    assert products["regional"] is True
    assert products["suburban"] is True
    assert not any(products[p] for p in ("bus", "ferry", "subway", "tram", "taxi"))


def test_products_for_all_trains() -> None:
    """Given normal mode, when choosing products, then national services are requested."""
    products = products_for(False)

    assert products["nationalExpress"] is True
    assert products["national"] is True
    assert products["bus"] is False


@pytest.mark.asyncio
async def test_queries_a_full_day_with_stopovers() -> None:
    """Given a day, when computing, then the source is asked for 24h with stopovers and no remarks."""
    source = FakeDepartureSource()

    await DailyReachabilityComputer(source).compute_day(DAY, ORIGIN, local_only=True)

    assert source.calls == [
        {
            "station_id": ORIGIN,
            "when": DAY,
            "duration_minutes": DAY_DURATION_MINUTES,
            "products": products_for(True),
            "stopovers": True,
            "remarks": False,
        }
    ]
    assert DAY_DURATION_MINUTES == 1440


@pytest.mark.asyncio
async def test_filters_then_flattens_departures() -> None:
    """Given trains and a bus, when computing, then only trains contribute records, duplicates kept."""
    source = FakeDepartureSource(
        [
            _departure("RE 1", "train", ("8000001", 30), ("8000002", 60)),
            _departure("Bus 5", "train", ("8000003", 20)),
            _departure("S 8", "train", ("8000001", 25)),
            _departure("123", "bus", ("8000004", 10)),
        ]
    )

    records = await DailyReachabilityComputer(source).compute_day(DAY, ORIGIN)

    assert [(r.id, r.duration) for r in records] == [
        ("8000001", 30),
        ("8000002", 60),
        ("8000001", 25),
    ]


@pytest.mark.asyncio
async def test_local_only_applies_name_rules() -> None:
    """Given a EuroNight, when computing local-only, then it is excluded."""
    source = FakeDepartureSource(
        [
            _departure("EN 451", "train", ("8000001", 30)),
            _departure("RB 2", "train", ("8000002", 40)),
        ]
    )
    computer = DailyReachabilityComputer(source)

    local = await computer.compute_day(DAY, ORIGIN, local_only=True)
    everything = await computer.compute_day(DAY, ORIGIN, local_only=False)

    assert [r.id for r in local] == ["8000002"]
    assert [r.id for r in everything] == ["8000001", "8000002"]


@pytest.mark.asyncio
async def test_source_errors_propagate() -> None:
    """Given a failing source, when computing, then the error propagates unchanged."""
    error = DepartureSourceError(ErrorDetails(status_code=429, reason="too many requests"))
    source = FakeDepartureSource(error=error)

    with pytest.raises(DepartureSourceError) as exc_info:
        await DailyReachabilityComputer(source).compute_day(DAY, ORIGIN)

    assert exc_info.value is error
    assert len(source.calls) == 1
