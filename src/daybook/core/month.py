"""Month windows over the event store - no I/O dependencies."""

import calendar
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from enum import IntEnum

from .events import EventRecord, day_key, parse_day
from .store import DayStore


class Weekday(IntEnum):
    """Weekday numbers as used by date.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: "str | int | Weekday") -> "Weekday":
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown weekday: {value!r}") from None


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_day(value)


def month_bounds(month_date: date | datetime | str) -> tuple[date, date]:
    """First and last day of the month containing month_date."""
    d = _as_date(month_date)
    last = calendar.monthrange(d.year, d.month)[1]
    return d.replace(day=1), d.replace(day=last)


def shift_month(month_date: date | datetime | str, delta: int) -> date:
    """First day of the month `delta` months away."""
    d = _as_date(month_date)
    index = d.year * 12 + (d.month - 1) + delta
    year, month = divmod(index, 12)
    return date(year, month + 1, 1)


def _start_of_week(d: date, week_start: Weekday) -> date:
    return d - timedelta(days=(d.weekday() - week_start) % 7)


def days_in_grid(
    month_date: date | datetime | str,
    week_start: "Weekday | str | int" = Weekday.SUNDAY,
) -> list[str]:
    """
    Every day shown on the month grid, padded to whole weeks.

    Runs from the first day of the week containing the 1st through the
    last day of the week containing the month's last day, so the length
    is always a multiple of 7.
    """
    week_start = Weekday.parse(week_start)
    first, last = month_bounds(month_date)
    grid_start = _start_of_week(first, week_start)
    grid_end = _start_of_week(last, week_start) + timedelta(days=6)

    days = []
    current = grid_start
    while current <= grid_end:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days


def grid_weeks(
    month_date: date | datetime | str,
    week_start: "Weekday | str | int" = Weekday.SUNDAY,
) -> list[list[str]]:
    """The month grid split into rows of seven days."""
    days = days_in_grid(month_date, week_start)
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def weekday_headers(week_start: "Weekday | str | int" = Weekday.SUNDAY) -> list[str]:
    """Short weekday names in grid column order."""
    week_start = Weekday.parse(week_start)
    return [calendar.day_abbr[(week_start + i) % 7] for i in range(7)]


def events_in_month(
    store: DayStore | Mapping[str, tuple[EventRecord, ...]],
    month_date: date | datetime | str,
) -> dict[str, tuple[EventRecord, ...]]:
    """
    Entries of the store that fall inside the calendar month.

    Uses the month's own bounds, not the padded grid. Store order is kept.
    """
    snapshot = store.snapshot() if isinstance(store, DayStore) else store
    first, last = month_bounds(month_date)
    first_key, last_key = first.isoformat(), last.isoformat()
    return {
        day: events
        for day, events in snapshot.items()
        if first_key <= day_key(day) <= last_key
    }
