"""Day-keyed event store with overlap enforcement - no I/O dependencies."""

import threading
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from types import MappingProxyType

from .errors import ConflictError, NotFoundError, ValidationError
from .events import EventRecord, day_key
from .interval import MINUTES_PER_DAY, TimeInterval, overlaps, parse_time

DayLike = date | datetime | str


class DayStore:
    """
    Mapping from day key to the ordered events on that day.

    Invariants held after every mutation:
    - a day present in the store has at least one event
    - no two events on the same day overlap
    - events keep insertion order

    Mutations build a new mapping and swap it in under a lock, so a reader
    holding a snapshot never sees a half-applied change.
    """

    def __init__(self, days: Mapping[str, Iterable[EventRecord]] | None = None):
        self._lock = threading.Lock()
        self._days: dict[str, tuple[EventRecord, ...]] = {}
        for day, events in (days or {}).items():
            events = tuple(events)
            if events:
                self._days[day_key(day)] = events

    def __len__(self) -> int:
        return len(self._days)

    def __contains__(self, day: object) -> bool:
        try:
            return day_key(day) in self._days
        except ValidationError:
            return False

    def __repr__(self) -> str:
        return f"DayStore(days={len(self._days)}, events={self.event_count()})"

    # ============== Reads ==============

    def snapshot(self) -> Mapping[str, tuple[EventRecord, ...]]:
        """Read-only view of the store as it is right now."""
        return MappingProxyType(dict(self._days))

    def days(self) -> list[str]:
        return list(self._days)

    def is_empty(self) -> bool:
        return not self._days

    def event_count(self) -> int:
        return sum(len(events) for events in self._days.values())

    def events_on(self, day: DayLike) -> tuple[EventRecord, ...]:
        return self._days.get(day_key(day), ())

    def get(self, day: DayLike, event_id: str) -> EventRecord:
        key = day_key(day)
        events = self._days.get(key, ())
        return events[self._index_of(key, events, event_id)]

    def find_conflicts(
        self,
        day: DayLike,
        interval: TimeInterval,
        ignore_id: str | None = None,
    ) -> list[EventRecord]:
        """Events on a day whose interval overlaps the given one."""
        return [
            e
            for e in self.events_on(day)
            if e.id != ignore_id and overlaps(interval, e.interval)
        ]

    def free_slots(
        self,
        day: DayLike,
        day_start: str | int = "00:00",
        day_end: str | int = MINUTES_PER_DAY,
        min_duration: int = 0,
    ) -> list[TimeInterval]:
        """
        Find the gaps between a day's events inside a window.

        Args:
            day: Day to inspect
            day_start: Start of the window (HH:MM or minutes)
            day_end: End of the window (HH:MM or minutes)
            min_duration: Minimum gap length in minutes

        Returns:
            Free intervals sorted by start
        """
        window_start = parse_time(day_start)
        window_end = parse_time(day_end)
        busy = sorted(
            (e.interval for e in self.events_on(day) if not e.interval.is_degenerate()),
            key=lambda i: i.start,
        )

        slots = []
        current = window_start
        for interval in busy:
            if interval.end <= window_start or interval.start >= window_end:
                continue
            start = max(interval.start, window_start)
            if start > current:
                gap = TimeInterval(current, start)
                if gap.duration_minutes() >= min_duration:
                    slots.append(gap)
            current = max(current, min(interval.end, window_end))

        if current < window_end:
            gap = TimeInterval(current, window_end)
            if gap.duration_minutes() >= min_duration:
                slots.append(gap)
        return slots

    # ============== Mutations ==============

    def add(self, day: DayLike, event: EventRecord) -> EventRecord:
        """
        Append an event to a day.

        Raises:
            ValidationError: the event has no name or does not end after it starts
            ConflictError: the event overlaps an existing event on that day
        """
        key = day_key(day)
        event.validate()
        with self._lock:
            existing = self._days.get(key, ())
            if any(e.id == event.id for e in existing):
                raise ValidationError(f"Event id {event.id!r} already exists on {key}")
            self._check_conflicts(key, existing, event)
            updated = dict(self._days)
            updated[key] = existing + (event,)
            self._days = updated
        return event

    def edit(self, day: DayLike, event_id: str, updated: EventRecord) -> EventRecord:
        """
        Replace an event, keeping its id.

        The no-overlap rule is checked against the day's other events only,
        so an edit that keeps the same times never conflicts with itself.
        """
        key = day_key(day)
        with self._lock:
            existing = self._days.get(key, ())
            index = self._index_of(key, existing, event_id)
            replacement = updated.with_id(event_id)
            replacement.validate()
            others = existing[:index] + existing[index + 1 :]
            self._check_conflicts(key, others, replacement)
            days = dict(self._days)
            days[key] = existing[:index] + (replacement,) + existing[index + 1 :]
            self._days = days
        return replacement

    def remove(self, day: DayLike, event_id: str) -> EventRecord:
        """Remove an event. The day disappears once its last event is gone."""
        key = day_key(day)
        with self._lock:
            existing = self._days.get(key, ())
            index = self._index_of(key, existing, event_id)
            removed = existing[index]
            remaining = existing[:index] + existing[index + 1 :]
            days = dict(self._days)
            if remaining:
                days[key] = remaining
            else:
                del days[key]
            self._days = days
        return removed

    def move(
        self,
        from_day: DayLike,
        event_id: str,
        to_day: DayLike,
        updated: EventRecord | None = None,
    ) -> EventRecord:
        """Move an event to another day, optionally changing it on the way."""
        source_key = day_key(from_day)
        target_key = day_key(to_day)
        if source_key == target_key:
            current = self.get(source_key, event_id)
            return self.edit(source_key, event_id, updated or current)

        with self._lock:
            source = self._days.get(source_key, ())
            index = self._index_of(source_key, source, event_id)
            moved = (updated or source[index]).with_id(event_id)
            moved.validate()
            target = self._days.get(target_key, ())
            self._check_conflicts(target_key, target, moved)
            remaining = source[:index] + source[index + 1 :]
            days = dict(self._days)
            if remaining:
                days[source_key] = remaining
            else:
                del days[source_key]
            days[target_key] = target + (moved,)
            self._days = days
        return moved

    # Positional forms, for callers holding a rendered list index

    def edit_at(self, day: DayLike, index: int, updated: EventRecord) -> EventRecord:
        return self.edit(day, self._id_at(day, index), updated)

    def remove_at(self, day: DayLike, index: int) -> EventRecord:
        return self.remove(day, self._id_at(day, index))

    # ============== Helpers ==============

    def _id_at(self, day: DayLike, index: int) -> str:
        key = day_key(day)
        events = self._days.get(key)
        if not events:
            raise NotFoundError(key)
        if not 0 <= index < len(events):
            raise NotFoundError(key, index)
        return events[index].id

    @staticmethod
    def _index_of(key: str, events: tuple[EventRecord, ...], event_id: str) -> int:
        if not events:
            raise NotFoundError(key)
        for i, event in enumerate(events):
            if event.id == event_id:
                return i
        raise NotFoundError(key, event_id)

    @staticmethod
    def _check_conflicts(
        key: str, events: Iterable[EventRecord], candidate: EventRecord
    ) -> None:
        for existing in events:
            if overlaps(candidate.interval, existing.interval):
                raise ConflictError(key, existing)
