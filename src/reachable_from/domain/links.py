"""Deep links into the DB timetable search and the bahn.guru calendar."""

from urllib.parse import quote

from reachable_from.domain.station_codes import format_hafas_station_id

CALENDAR_BASE_URL = "https://bahn.guru/calendar"
DB_TRAIN_SEARCH_URL = "https://reiseauskunft.bahn.de/bin/trainsearch.exe"

# DB productClassFilter bitmasks
PRODUCT_CLASS_NATIONAL_EXPRESS = 1
PRODUCT_CLASS_NATIONAL = 2
PRODUCT_CLASS_OTHER = 31

_LANGUAGE_PATHS = {"de": "dn", "en": "en"}


def db_product_class_filter(product: str | None) -> int:
    """Map a line product to the DB train search product class filter."""
    if product in ("nationalExpress", "nationalExp"):
        return PRODUCT_CLASS_NATIONAL_EXPRESS
    if product == "national":
        return PRODUCT_CLASS_NATIONAL
    return PRODUCT_CLASS_OTHER


def _stringify(query: dict[str, str | int | None]) -> str:
    """Encode a query with sorted keys; ``None`` values become bare keys."""
    parts = []
    for key in sorted(query):
        value = query[key]
        if value is None:
            parts.append(quote(key, safe=""))
        else:
            parts.append(f"{quote(key, safe='')}={quote(str(value), safe='')}")
    return "&".join(parts)


def build_calendar_url(origin_id: str, destination_id: str) -> str:
    """Build the bahn.guru calendar URL for direct connections origin -> destination."""
    query: dict[str, str | int | None] = {
        "origin": format_hafas_station_id(origin_id),
        "destination": format_hafas_station_id(destination_id),
        "submit": "Suchen",
        "class": 2,
        "bc": 0,
        "departureAfter": None,
        "arrivalBefore": None,
        "duration": None,
        "maxChanges": 0,
        "weeks": 4,
    }
    return f"{CALENDAR_BASE_URL}?{_stringify(query)}"


def build_db_url(
    station_id: str,
    train_number: str,
    product: str | None,
    day: str,
    language: str = "de",
) -> str:
    """Build a DB train search URL for one train on one day.

    Args:
        station_id: Station the train departs from.
        train_number: The line's ``fahrtNr``.
        product: Line product, mapped through :func:`db_product_class_filter`.
        day: Departure date formatted ``DD.MM.YY``.
        language: ``"de"`` or ``"en"``.
    """
    path = _LANGUAGE_PATHS.get(language)
    if path is None:
        raise ValueError(f"Unsupported language for DB url: {language!r}")
    product_filter = db_product_class_filter(product)
    return (
        f"{DB_TRAIN_SEARCH_URL}/{path}?protocol=https:&rt=1&requestMode=MZP"
        f"&productClassFilter={product_filter}&trainname={train_number}"
        f"&date={day}&stationname={station_id}"
    )
