"""Calendar projection package."""

from guideos.calendar.grid import (
    GRID_CELLS,
    CalendarCell,
    MonthCursor,
    build_month_grid,
    grid_start,
)

__all__ = [
    "GRID_CELLS",
    "CalendarCell",
    "MonthCursor",
    "build_month_grid",
    "grid_start",
]
