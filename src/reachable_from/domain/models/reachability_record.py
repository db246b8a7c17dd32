"""Reachability record domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReachabilityRecord(BaseModel):
    """How to reach one destination from the origin with a single direct train.

    Serialized with the camelCase keys the HTTP API exposes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    location: dict[str, Any] | None = None
    duration: float = Field(gt=0)
    db_url_german: str = Field(alias="dbUrlGerman")
    db_url_english: str = Field(alias="dbUrlEnglish")
    calendar_url: str = Field(alias="calendarUrl")
    frequency: int | None = Field(default=None, ge=0)

    def to_json(self) -> dict[str, Any]:
        """Return the wire representation."""
        return self.model_dump(by_alias=True)
