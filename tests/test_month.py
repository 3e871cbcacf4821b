"""Tests for month grids and month windows."""

from datetime import date

import pytest

from daybook.core.events import EventRecord
from daybook.core.month import (
    Weekday,
    days_in_grid,
    events_in_month,
    grid_weeks,
    month_bounds,
    shift_month,
    weekday_headers,
)
from daybook.core.store import DayStore


@pytest.fixture
def store():
    s = DayStore()
    s.add("2024-02-29", EventRecord.create("Leap", "09:00", "10:00"))
    s.add("2024-03-31", EventRecord.create("Month end", "09:00", "10:00"))
    s.add("2024-03-01", EventRecord.create("Month start", "09:00", "10:00"))
    s.add("2024-04-01", EventRecord.create("Next month", "09:00", "10:00"))
    return s


class TestMonthBounds:
    def test_leap_february(self):
        assert month_bounds(date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_accepts_string(self):
        assert month_bounds("2023-12-25") == (date(2023, 12, 1), date(2023, 12, 31))

    @pytest.mark.parametrize(
        "start,delta,expected",
        [
            (date(2024, 3, 15), -1, date(2024, 2, 1)),
            (date(2024, 1, 31), -1, date(2023, 12, 1)),
            (date(2024, 12, 1), 1, date(2025, 1, 1)),
            (date(2024, 3, 5), 0, date(2024, 3, 1)),
        ],
    )
    def test_shift_month(self, start, delta, expected):
        assert shift_month(start, delta) == expected


class TestDaysInGrid:
    def test_leading_days_when_first_is_wednesday(self):
        # May 1st 2024 is a Wednesday
        grid = days_in_grid(date(2024, 5, 10))
        assert grid[:4] == ["2024-04-28", "2024-04-29", "2024-04-30", "2024-05-01"]
        assert len(grid) % 7 == 0

    def test_trailing_days(self):
        grid = days_in_grid(date(2024, 5, 1))
        # May 31st 2024 is a Friday; the week ends Saturday June 1st
        assert grid[-2:] == ["2024-05-31", "2024-06-01"]
        assert len(grid) == 35

    def test_month_starting_on_sunday_has_no_leading_days(self):
        # September 1st 2024 is a Sunday
        assert days_in_grid(date(2024, 9, 1))[0] == "2024-09-01"

    def test_exact_four_weeks(self):
        # February 2015 starts Sunday and ends Saturday
        assert len(days_in_grid(date(2015, 2, 1))) == 28

    def test_six_week_month(self):
        # March 2024 starts Friday and has 31 days
        assert len(days_in_grid(date(2024, 3, 1))) == 42

    def test_always_multiple_of_seven(self):
        for year in (2023, 2024):
            for month in range(1, 13):
                for start in Weekday:
                    grid = days_in_grid(date(year, month, 1), start)
                    assert len(grid) % 7 == 0
                    assert f"{year}-{month:02d}-01" in grid

    def test_monday_week_start(self):
        grid = days_in_grid(date(2024, 5, 1), "Monday")
        assert grid[0] == "2024-04-29"
        assert date.fromisoformat(grid[0]).weekday() == Weekday.MONDAY

    def test_independent_of_store(self, store):
        assert days_in_grid(date(2024, 3, 1)) == days_in_grid(date(2024, 3, 20))

    def test_weeks(self):
        weeks = grid_weeks(date(2024, 3, 1))
        assert all(len(w) == 7 for w in weeks)
        assert weeks[0][0] == "2024-02-25"

    def test_headers(self):
        assert weekday_headers()[0] == "Sun"
        assert weekday_headers("monday")[0] == "Mon"

    def test_unknown_week_start(self):
        with pytest.raises(ValueError):
            days_in_grid(date(2024, 3, 1), "Funday")


class TestEventsInMonth:
    def test_calendar_month_bounds(self, store):
        march = events_in_month(store, date(2024, 3, 10))
        assert "2024-02-29" not in march
        assert "2024-03-31" in march
        assert "2024-03-01" in march
        assert "2024-04-01" not in march

    def test_keeps_store_order(self, store):
        assert list(events_in_month(store, date(2024, 3, 1))) == ["2024-03-31", "2024-03-01"]

    def test_does_not_mutate(self, store):
        before = dict(store.snapshot())
        events_in_month(store, date(2024, 3, 1))
        assert dict(store.snapshot()) == before

    def test_accepts_snapshot(self, store):
        assert events_in_month(store.snapshot(), "2024-02-01") == {
            "2024-02-29": store.events_on("2024-02-29")
        }

    def test_empty_month(self, store):
        assert events_in_month(store, date(2030, 1, 1)) == {}
