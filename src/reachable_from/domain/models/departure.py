"""Departure domain model (one train service leaving the origin station)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Location:
    """Geographic position of a stop."""

    latitude: float
    longitude: float
    type: str = "location"
    id: str | None = None


@dataclass(frozen=True)
class Stop:
    """A station or stop a train calls at."""

    id: str | None
    name: str
    location: Location | None = None


@dataclass(frozen=True)
class Stopover:
    """A downstream call of a train, with its expected arrival."""

    stop: Stop | None
    arrival: datetime | None


@dataclass(frozen=True)
class Operator:
    """Company running the service."""

    id: str | None
    name: str


@dataclass(frozen=True)
class Line:
    """Line descriptor as delivered by the timetable source."""

    mode: str
    name: str
    product: str
    fahrt_nr: str = ""
    operator: Operator | None = None


@dataclass(frozen=True)
class Departure:
    """Represents a single scheduled departure with its downstream stopovers."""

    line: Line
    when: datetime | None
    stop_id: str
    next_stopovers: tuple[Stopover, ...] = field(default_factory=tuple)
