"""Exceptions raised across layer boundaries."""

from reachable_from.domain.models.error_details import ErrorDetails


class DepartureSourceError(Exception):
    """The timetable source could not deliver departures."""

    def __init__(self, details: ErrorDetails) -> None:
        super().__init__(details.reason)
        self.details = details

    @property
    def status_code(self) -> int | None:
        return self.details.status_code
