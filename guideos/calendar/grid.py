"""
Calendar Projection

Pure month-grid calculation for the calendar view.

The grid is always 42 cells (six weeks) starting on the Sunday on or
before the 1st of the month, so the view keeps a fixed height. Each cell
carries every trip on its date; cutting the list down for display is
done by CalendarCell.preview at the presentation boundary.

Months are 1-based (January = 1), as in datetime.date.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from guideos.config import get_settings
from guideos.models.trip import Trip
from guideos.repositories.trips import trips_matching_date


GRID_CELLS = 42

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class CalendarCell(BaseModel):
    """One day in the month grid."""

    date: date
    is_current_month: bool
    is_today: bool
    trips: list[Trip] = Field(default_factory=list)

    @property
    def date_key(self) -> str:
        """The YYYY-MM-DD string trips are matched against."""
        return self.date.isoformat()

    def preview(self, limit: Optional[int] = None) -> tuple[list[Trip], int]:
        """
        Trips to draw in the cell and how many were left out.

        Args:
            limit: How many trips to show; defaults to the configured
                   calendar_preview_limit

        Returns:
            (visible_trips, hidden_count) for a "+N more" marker
        """
        if limit is None:
            limit = get_settings().app.calendar_preview_limit
        limit = max(limit, 0)
        return self.trips[:limit], max(len(self.trips) - limit, 0)


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the 1st of (year, month)."""
    first = date(year, month, 1)
    # weekday(): Monday=0 .. Sunday=6
    days_since_sunday = (first.weekday() + 1) % 7
    return first - timedelta(days=days_since_sunday)


def build_month_grid(
    year: int,
    month: int,
    trips: Iterable[Trip],
    today: Optional[date] = None,
) -> list[CalendarCell]:
    """
    Build the 42-cell grid for (year, month).

    Args:
        year: Calendar year
        month: Month number, 1-12
        trips: Trip snapshot to bucket by date
        today: Override for the current date (defaults to date.today())

    Raises:
        ValueError: If month is outside 1-12 or year is out of range
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")

    try:
        start = grid_start(year, month)
        days = [start + timedelta(days=offset) for offset in range(GRID_CELLS)]
    except OverflowError as e:
        raise ValueError(f"no complete grid for {year}-{month:02d}") from e

    today = today or date.today()
    trips = list(trips)

    cells = []
    for day in days:
        cells.append(
            CalendarCell(
                date=day,
                is_current_month=day.month == month,
                is_today=day == today,
                trips=trips_matching_date(trips, day.isoformat()),
            )
        )
    return cells


class MonthCursor(BaseModel):
    """The month the calendar is showing, with navigation."""

    model_config = ConfigDict(frozen=True)

    # Years whose every month has a complete grid inside the date range
    year: int = Field(ge=2, le=9998)
    month: int = Field(ge=1, le=12)

    @classmethod
    def today(cls, today: Optional[date] = None) -> "MonthCursor":
        today = today or date.today()
        return cls(year=today.year, month=today.month)

    def previous(self) -> "MonthCursor":
        if self.month == 1:
            return MonthCursor(year=self.year - 1, month=12)
        return MonthCursor(year=self.year, month=self.month - 1)

    def next(self) -> "MonthCursor":
        if self.month == 12:
            return MonthCursor(year=self.year + 1, month=1)
        return MonthCursor(year=self.year, month=self.month + 1)

    @property
    def title(self) -> str:
        """e.g. "March 2024"."""
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def grid(self, trips: Iterable[Trip], today: Optional[date] = None) -> list[CalendarCell]:
        return build_month_grid(self.year, self.month, trips, today=today)
