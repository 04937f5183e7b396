"""Tests for the calendar projection."""

from datetime import date

import pytest

from guideos.calendar import GRID_CELLS, CalendarCell, MonthCursor, build_month_grid, grid_start
from guideos.models import Trip


SUNDAY = 6  # date.weekday()


class TestBuildMonthGrid:

    @pytest.mark.parametrize("year,month", [
        (2024, 1), (2024, 2), (2024, 3), (2024, 9), (2024, 12),
        (2015, 2), (2023, 10), (2000, 2), (2026, 10),
    ])
    def test_always_42_cells_starting_on_a_sunday(self, year, month):
        cells = build_month_grid(year, month, [], today=date(2024, 1, 1))
        assert len(cells) == GRID_CELLS
        assert cells[0].date.weekday() == SUNDAY
        assert cells[0].date <= date(year, month, 1)

    def test_month_starting_on_friday(self):
        """Test March 2024 (starts Friday) begins on the preceding Sunday."""
        cells = build_month_grid(2024, 3, [], today=date(2024, 1, 1))
        assert cells[0].date == date(2024, 2, 25)
        assert cells[-1].date == date(2024, 4, 6)
        assert [c.date for c in cells[:5]] == [date(2024, 2, d) for d in range(25, 30)]

    def test_month_starting_on_sunday_starts_on_the_first(self):
        cells = build_month_grid(2024, 9, [], today=date(2024, 1, 1))
        assert cells[0].date == date(2024, 9, 1)

    def test_consecutive_days(self):
        cells = build_month_grid(2024, 12, [], today=date(2024, 1, 1))
        for earlier, later in zip(cells, cells[1:]):
            assert (later.date - earlier.date).days == 1

    def test_current_month_flags(self):
        cells = build_month_grid(2024, 3, [], today=date(2024, 1, 1))
        in_month = [c for c in cells if c.is_current_month]
        assert len(in_month) == 31
        assert in_month[0].date == date(2024, 3, 1)
        assert not cells[0].is_current_month
        assert not cells[-1].is_current_month

    def test_today_flag(self):
        cells = build_month_grid(2024, 3, [], today=date(2024, 3, 14))
        flagged = [c.date for c in cells if c.is_today]
        assert flagged == [date(2024, 3, 14)]

    def test_today_outside_grid(self):
        cells = build_month_grid(2024, 3, [], today=date(2025, 1, 1))
        assert not any(c.is_today for c in cells)

    def test_today_defaults_to_real_date(self):
        today = date.today()
        cells = build_month_grid(today.year, today.month, [])
        assert [c.date for c in cells if c.is_today] == [today]

    def test_trips_bucketed_by_exact_date(self):
        trips = [
            Trip(id="a", client="A", date="2024-03-05"),
            Trip(id="b", client="B", date="2024-03-05"),
            Trip(id="c", client="C", date="2024-02-26"),
            Trip(id="d", client="D", date=""),
            Trip(id="e", client="E", date="2024-3-5"),
        ]
        cells = {c.date_key: c for c in build_month_grid(2024, 3, trips, today=date(2024, 1, 1))}
        assert [t.id for t in cells["2024-03-05"].trips] == ["a", "b"]
        assert [t.id for t in cells["2024-02-26"].trips] == ["c"]
        assert sum(len(c.trips) for c in cells.values()) == 3

    def test_cells_keep_every_trip(self):
        trips = [Trip(id=str(i), client=f"C{i}", date="2024-03-05") for i in range(5)]
        cells = build_month_grid(2024, 3, trips, today=date(2024, 1, 1))
        cell = next(c for c in cells if c.date == date(2024, 3, 5))
        assert len(cell.trips) == 5

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError):
            build_month_grid(2024, month, [])

    @pytest.mark.parametrize("year,month", [(1, 1), (9999, 12), (0, 6), (10000, 1)])
    def test_grid_outside_date_range(self, year, month):
        """Test months whose six weeks leave the date range raise ValueError."""
        with pytest.raises(ValueError):
            build_month_grid(year, month, [])

    def test_grid_start(self):
        assert grid_start(2024, 3) == date(2024, 2, 25)
        assert grid_start(2024, 9) == date(2024, 9, 1)


class TestCellPreview:

    def _cell(self, count: int) -> CalendarCell:
        trips = [Trip(id=str(i), client=f"C{i}", date="2024-03-05") for i in range(count)]
        return CalendarCell(date=date(2024, 3, 5), is_current_month=True, is_today=False, trips=trips)

    def test_default_preview_limit_is_two(self):
        visible, hidden = self._cell(5).preview()
        assert [t.id for t in visible] == ["0", "1"]
        assert hidden == 3

    def test_preview_without_overflow(self):
        visible, hidden = self._cell(1).preview()
        assert len(visible) == 1
        assert hidden == 0

    def test_preview_custom_limit(self):
        visible, hidden = self._cell(5).preview(limit=4)
        assert len(visible) == 4
        assert hidden == 1

    def test_preview_limit_from_settings(self, monkeypatch):
        monkeypatch.setenv("CALENDAR_PREVIEW_LIMIT", "3")
        visible, hidden = self._cell(5).preview()
        assert len(visible) == 3
        assert hidden == 2


class TestMonthCursor:

    def test_next_rolls_over_year(self):
        assert MonthCursor(year=2024, month=12).next() == MonthCursor(year=2025, month=1)

    def test_previous_rolls_over_year(self):
        assert MonthCursor(year=2024, month=1).previous() == MonthCursor(year=2023, month=12)

    def test_next_and_previous_are_inverse(self):
        cursor = MonthCursor(year=2024, month=6)
        assert cursor.next().previous() == cursor
        assert cursor.previous().next() == cursor

    def test_today(self):
        assert MonthCursor.today(date(2024, 3, 14)) == MonthCursor(year=2024, month=3)

    def test_title(self):
        assert MonthCursor(year=2024, month=3).title == "March 2024"

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            MonthCursor(year=2024, month=13)

    @pytest.mark.parametrize("year", [1, 9999])
    def test_years_without_a_complete_grid_rejected(self, year):
        with pytest.raises(ValueError):
            MonthCursor(year=year, month=6)

    @pytest.mark.parametrize("year,month", [(2, 1), (9998, 12)])
    def test_boundary_cursors_build_a_grid(self, year, month):
        assert len(MonthCursor(year=year, month=month).grid([])) == GRID_CELLS

    def test_grid(self):
        cells = MonthCursor(year=2024, month=3).grid([], today=date(2024, 3, 1))
        assert len(cells) == GRID_CELLS
        assert cells[5].is_today


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
