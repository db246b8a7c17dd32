"""Station identifier helpers."""

import re

_UIC_LOCATION_CODE = re.compile(r"^[0-9]{7}$")
_HAFAS_PADDED_ID = re.compile(r"^00[0-9]{7}$")


def is_uic_location_code(value: str | None) -> bool:
    """Check whether ``value`` is a 7-digit UIC location code.

    The first two digits are the UIC country code. Only the range is checked
    (10 to 99), not the list of assigned codes, so an unassigned country such
    as 19 still passes.
    """
    if not value or not _UIC_LOCATION_CODE.match(value):
        return False
    return int(value[:2]) >= 10


def format_hafas_station_id(station_id: str) -> str:
    """Strip the ``00`` padding HAFAS puts in front of 7-digit UIC codes."""
    if _HAFAS_PADDED_ID.match(station_id):
        return station_id[2:]
    return station_id
