"""Free-text event search - no I/O dependencies."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from .events import DayEvent, EventRecord
from .store import DayStore


@dataclass(frozen=True)
class SearchResult:
    """Days and events matching a query."""

    query: str = ""
    days: frozenset[str] = field(default_factory=frozenset)
    events: tuple[DayEvent, ...] = ()

    @property
    def active(self) -> bool:
        """False when the query was blank and no filter should apply."""
        return bool(self.query)

    def includes_day(self, day: str) -> bool:
        """Whether a day should stay visible under this filter."""
        return not self.active or day in self.days


def search(
    store: DayStore | Mapping[str, tuple[EventRecord, ...]],
    query: str,
) -> SearchResult:
    """
    Case-insensitive substring search over event names across the whole store.

    A blank query means "no filter" and returns an empty, inactive result.
    """
    needle = (query or "").strip()
    if not needle:
        return SearchResult()

    folded = needle.casefold()
    snapshot = store.snapshot() if isinstance(store, DayStore) else store

    days = []
    matches = []
    for day, events in snapshot.items():
        hits = [e for e in events if folded in e.name.casefold()]
        if hits:
            days.append(day)
            matches.extend(DayEvent(day=day, event=e) for e in hits)

    return SearchResult(query=needle, days=frozenset(days), events=tuple(matches))
