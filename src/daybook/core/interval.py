"""Time-of-day values and half-open intervals - no I/O dependencies."""

import re
from dataclasses import dataclass

from .errors import ValidationError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_time(value: str | int) -> int:
    """
    Parse a wall-clock time into minutes since midnight.

    Accepts "HH:MM", "H:MM" and "HH:MM:SS" (seconds are dropped), or an
    int that is already a minute count. "24:00" is allowed as the end of
    the day.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid time: {value!r}")
    if isinstance(value, int):
        minutes = value
    else:
        match = _TIME_PATTERN.match(str(value).strip())
        if not match:
            raise ValidationError(f"Invalid time: {value!r}")
        hours, mins = int(match.group(1)), int(match.group(2))
        if mins >= 60 or (match.group(3) and int(match.group(3)) >= 60):
            raise ValidationError(f"Invalid time: {value!r}")
        minutes = hours * 60 + mins
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValidationError(f"Time out of range: {value!r}")
    return minutes


def format_time(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


@dataclass(frozen=True)
class TimeInterval:
    """A half-open [start, end) range of minutes since midnight."""

    start: int
    end: int

    @classmethod
    def from_strings(cls, start: str, end: str) -> "TimeInterval":
        return cls(start=parse_time(start), end=parse_time(end))

    def duration_minutes(self) -> int:
        return self.end - self.start

    def is_degenerate(self) -> bool:
        """Zero or negative length."""
        return self.end <= self.start

    def format(self) -> str:
        return f"{format_time(self.start)}-{format_time(self.end)}"

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        return overlaps(self, other)


def parse_range(value: str) -> TimeInterval:
    """Parse "HH:MM-HH:MM" into an interval that ends after it starts."""
    start, sep, end = str(value).partition("-")
    if not sep:
        raise ValidationError(f"Invalid time range: {value!r}")
    interval = TimeInterval.from_strings(start, end)
    if interval.is_degenerate():
        raise ValidationError(f"Time range must end after it starts: {value!r}")
    return interval


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """
    Check if two intervals share any instant.

    Touching endpoints do not overlap, so back-to-back events are fine.
    A zero-length interval overlaps an interval it sits strictly inside,
    but never itself or another point.
    """
    return a.start < b.end and b.start < a.end
