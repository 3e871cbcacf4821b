"""Tests for time-of-day intervals and the overlap rule."""

import itertools

import pytest

from daybook.core.errors import ValidationError
from daybook.core.interval import TimeInterval, format_time, overlaps, parse_range, parse_time


def iv(start: str, end: str) -> TimeInterval:
    return TimeInterval.from_strings(start, end)


class TestParseTime:
    def test_hh_mm(self):
        assert parse_time("09:30") == 570

    def test_single_digit_hour(self):
        assert parse_time("9:05") == 545

    def test_seconds_dropped(self):
        assert parse_time("10:15:59") == 615

    def test_end_of_day(self):
        assert parse_time("24:00") == 1440

    def test_minutes_passthrough(self):
        assert parse_time(90) == 90

    @pytest.mark.parametrize("value", ["", "9", "9am", "12:60", "25:00", "-1:00", "ab:cd"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_time(value)

    def test_format_round_trip(self):
        assert format_time(parse_time("07:05")) == "07:05"


class TestParseRange:
    def test_range(self):
        assert parse_range("9:00-17:30") == iv("09:00", "17:30")

    def test_whole_day(self):
        assert parse_range("00:00-24:00").duration_minutes() == 1440

    @pytest.mark.parametrize("value", ["09:00", "17:00-09:00", "09:00-09:00", "9am-5pm"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_range(value)


class TestTimeInterval:
    def test_duration(self):
        assert iv("09:00", "10:30").duration_minutes() == 90

    def test_format(self):
        assert iv("09:00", "10:30").format() == "09:00-10:30"

    def test_degenerate(self):
        assert iv("10:00", "10:00").is_degenerate() is True
        assert iv("11:00", "10:00").is_degenerate() is True
        assert iv("10:00", "10:01").is_degenerate() is False

    def test_contains_is_half_open(self):
        slot = iv("09:00", "10:00")
        assert slot.contains(parse_time("09:00")) is True
        assert slot.contains(parse_time("09:59")) is True
        assert slot.contains(parse_time("10:00")) is False


class TestOverlaps:
    def test_abutting_do_not_overlap(self):
        assert overlaps(iv("09:00", "10:00"), iv("10:00", "11:00")) is False

    def test_partial_overlap(self):
        assert overlaps(iv("09:00", "10:00"), iv("09:30", "10:30")) is True

    def test_containment(self):
        assert overlaps(iv("09:00", "12:00"), iv("10:00", "11:00")) is True
        assert overlaps(iv("10:00", "11:00"), iv("09:00", "12:00")) is True

    def test_identical(self):
        a = iv("09:00", "10:00")
        assert overlaps(a, a) is True

    def test_point_inside_interval_overlaps(self):
        point = iv("09:30", "09:30")
        assert overlaps(point, iv("09:00", "10:00")) is True
        assert overlaps(iv("09:00", "10:00"), point) is True

    def test_point_on_boundary_does_not_overlap(self):
        busy = iv("09:00", "10:00")
        assert overlaps(iv("09:00", "09:00"), busy) is False
        assert overlaps(iv("10:00", "10:00"), busy) is False

    def test_point_never_overlaps_point(self):
        point = iv("09:30", "09:30")
        assert overlaps(point, point) is False

    def test_backwards_interval(self):
        backwards = iv("11:00", "09:00")
        assert overlaps(backwards, iv("09:30", "10:00")) is False
        assert overlaps(backwards, backwards) is False

    def test_method_matches_function(self):
        a, b = iv("09:00", "10:00"), iv("09:30", "10:30")
        assert a.overlaps(b) is overlaps(a, b)


# Every interval on a coarse grid, so pairwise properties cover all orderings
_POINTS = [0, 30, 60, 90, 120]
_INTERVALS = [TimeInterval(s, e) for s, e in itertools.product(_POINTS, _POINTS)]


def _boundary_rule(new: TimeInterval, old: TimeInterval) -> bool:
    """
    A bound of one interval strictly inside the other, or identical spans.

    Each clause also requires the intervals to reach each other, which only
    matters for backwards intervals.
    """
    reach = new.start < old.end and old.start < new.end
    start_inside = old.start < new.start < old.end
    end_inside = old.start < new.end < old.end
    contains_start = new.start < old.start < new.end
    contains_end = new.start < old.end < new.end
    same_span = new == old and not new.is_degenerate()
    return same_span or (
        reach and (start_inside or end_inside or contains_start or contains_end)
    )


class TestOverlapProperties:
    def test_symmetric(self):
        for a, b in itertools.product(_INTERVALS, repeat=2):
            assert overlaps(a, b) == overlaps(b, a), (a, b)

    def test_reflexive_unless_zero_length(self):
        for a in _INTERVALS:
            assert overlaps(a, a) == (not a.is_degenerate()), a

    def test_matches_boundary_rule(self):
        for a, b in itertools.product(_INTERVALS, repeat=2):
            assert overlaps(a, b) == _boundary_rule(a, b), (a, b)
