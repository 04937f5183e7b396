"""
Trip Model

A trip is one scheduled (or draft) engagement with a client.
The date is kept as the ISO string the guide entered, not a parsed
date: the calendar buckets by exact string match and an empty date
marks an unscheduled draft.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from guideos.models.records import Record


class TripStatus(str, Enum):
    """Trip lifecycle state, toggled by the guide."""
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"

    def toggled(self) -> "TripStatus":
        if self is TripStatus.UPCOMING:
            return TripStatus.COMPLETED
        return TripStatus.UPCOMING


class TripSortKey(str, Enum):
    """Orders offered by the trip list."""
    DATE = "date"
    CLIENT = "client"


class Trip(Record):
    """
    A guided trip.

    Only `client` and `date` are needed for a trip to be saved;
    the Trip Planner may save a draft without a date.
    """

    date: str = Field(
        default="",
        description="Trip date as YYYY-MM-DD, empty for drafts"
    )
    client: str = Field(
        default="",
        description="Client name"
    )
    location: str = ""
    gear: str = ""
    notes: str = ""
    status: TripStatus = Field(
        default=TripStatus.UPCOMING,
        description="Upcoming or Completed"
    )

    @field_validator('status', mode='before')
    @classmethod
    def default_unknown_status(cls, v):
        """Unrecognised stored statuses read back as Upcoming."""
        if isinstance(v, TripStatus):
            return v
        try:
            return TripStatus(v)
        except ValueError:
            return TripStatus.UPCOMING

    @property
    def is_upcoming(self) -> bool:
        return self.status is TripStatus.UPCOMING

    @property
    def is_scheduled(self) -> bool:
        return bool(self.date)

    @property
    def parsed_date(self) -> Optional[datetime.date]:
        """The trip date, or None when empty or not a valid ISO date."""
        return parse_trip_date(self.date)


def parse_trip_date(value: str) -> Optional[datetime.date]:
    """Parse a YYYY-MM-DD string; anything else is None."""
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        return None
