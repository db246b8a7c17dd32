"""Reachability service port."""

from typing import Protocol

from reachable_from.domain.models.reachability_record import ReachabilityRecord


class ReachabilityService(Protocol):
    """Port for answering "where can I go directly from this station?"."""

    async def reachable_from(
        self, station_id: str, local_trains_only: bool = False
    ) -> list[ReachabilityRecord]:
        """Return one record per destination reachable by a single direct train."""
        ...
