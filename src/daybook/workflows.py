"""Shared workflow layer between the CLI and any other front end.

A Session owns the event store for one run: it loads the store at start,
flushes it after every successful mutation, and turns core errors into
Outcome values so nothing escapes to the caller as an exception.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path

from .adapters.file_blob import FileBlobStore
from .adapters.file_export import DirectoryExportSink
from .config import Config
from .core.codec import decode_store, encode_store
from .core.errors import CalendarError, MalformedDataError
from .core.events import Category, EventRecord
from .core.export import export_filename, render
from .core.interval import TimeInterval, parse_range, parse_time
from .core.month import days_in_grid, events_in_month
from .core.search import SearchResult, search
from .core.store import DayStore
from .ports.blob_store import BlobStore
from .ports.export_sink import ExportSink

logger = logging.getLogger(__name__)

DayLike = date | datetime | str


@dataclass(frozen=True)
class Outcome:
    """Result of a session operation."""

    ok: bool
    event: EventRecord | None = None
    error: CalendarError | None = None
    path: Path | None = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""

    @classmethod
    def success(cls, event: EventRecord | None = None, path: Path | None = None) -> "Outcome":
        return cls(ok=True, event=event, path=path)

    @classmethod
    def failure(cls, error: CalendarError) -> "Outcome":
        return cls(ok=False, error=error)


class Session:
    """One user's calendar for the lifetime of a run."""

    def __init__(
        self,
        store: DayStore,
        blob_store: BlobStore,
        key: str = "events",
        persisted: bool = False,
    ):
        self.store = store
        self.blob_store = blob_store
        self.key = key
        # True once the blob has held data, so emptying the store still saves
        self._persisted = persisted

    @classmethod
    def open(cls, blob_store: BlobStore, key: str = "events") -> "Session":
        """Load the saved store, starting empty when there is none or it is unreadable."""
        try:
            text = blob_store.read(key)
            if text is None:
                logger.debug(f"No saved events under {key!r}, starting empty")
                return cls(DayStore(), blob_store, key)
            store = decode_store(text)
        except MalformedDataError as e:
            logger.warning(f"Ignoring unreadable saved events under {key!r}: {e}")
            return cls(DayStore(), blob_store, key)

        logger.debug(f"Loaded {store.event_count()} events on {len(store)} days")
        return cls(store, blob_store, key, persisted=True)

    def flush(self) -> bool:
        """Persist the store. Returns False when there was nothing to save yet."""
        if self.store.is_empty() and not self._persisted:
            return False
        self.blob_store.write(self.key, encode_store(self.store))
        self._persisted = True
        return True

    # ============== Mutations ==============

    def _mutate(self, action: str, func, *args) -> Outcome:
        try:
            event = func(*args)
        except CalendarError as e:
            logger.info(f"{action} rejected: {e}")
            return Outcome.failure(e)
        self.flush()
        logger.info(f"{action}: {event.name} ({event.interval.format()})")
        return Outcome.success(event)

    def add(self, day: DayLike, event: EventRecord) -> Outcome:
        return self._mutate("Added", self.store.add, day, event)

    def add_event(
        self,
        day: DayLike,
        name: str,
        start: str,
        end: str,
        description: str = "",
        category: str | Category | None = None,
    ) -> Outcome:
        """Build a new event from form fields and add it."""
        try:
            event = EventRecord.create(name, start, end, description, category)
        except CalendarError as e:
            return Outcome.failure(e)
        return self.add(day, event)

    def edit(self, day: DayLike, event_id: str, updated: EventRecord) -> Outcome:
        return self._mutate("Updated", self.store.edit, day, event_id, updated)

    def edit_event(
        self,
        day: DayLike,
        event_id: str,
        name: str | None = None,
        start: str | None = None,
        end: str | None = None,
        description: str | None = None,
        category: str | Category | None = None,
        to_day: DayLike | None = None,
    ) -> Outcome:
        """
        Change selected fields of an event, leaving the rest as they are.

        With to_day the changed event also moves to that day, in one step.
        """
        try:
            current = self.store.get(day, event_id)
            interval = TimeInterval(
                parse_time(start) if start is not None else current.interval.start,
                parse_time(end) if end is not None else current.interval.end,
            )
            updated = replace(
                current,
                name=current.name if name is None else name,
                interval=interval,
                description=current.description if description is None else description,
                category=current.category if category is None else Category.parse(category),
            )
        except CalendarError as e:
            return Outcome.failure(e)
        if to_day is not None:
            return self._mutate("Moved", self.store.move, day, event_id, to_day, updated)
        return self.edit(day, event_id, updated)

    def edit_at(self, day: DayLike, index: int, updated: EventRecord) -> Outcome:
        return self._mutate("Updated", self.store.edit_at, day, index, updated)

    def remove(self, day: DayLike, event_id: str) -> Outcome:
        return self._mutate("Removed", self.store.remove, day, event_id)

    def remove_at(self, day: DayLike, index: int) -> Outcome:
        return self._mutate("Removed", self.store.remove_at, day, index)

    def move(self, from_day: DayLike, event_id: str, to_day: DayLike) -> Outcome:
        return self._mutate("Moved", self.store.move, from_day, event_id, to_day)

    # ============== Reads ==============

    def events_on(self, day: DayLike) -> tuple[EventRecord, ...]:
        return self.store.events_on(day)

    def free_slots(
        self, day: DayLike, window: str = "00:00-24:00", min_duration: int = 0
    ) -> list[TimeInterval]:
        """Gaps between the day's events inside a "HH:MM-HH:MM" window."""
        hours = parse_range(window)
        return self.store.free_slots(day, hours.start, hours.end, min_duration)

    def month_events(self, month_date: DayLike) -> dict[str, tuple[EventRecord, ...]]:
        return events_in_month(self.store, month_date)

    def grid(self, month_date: DayLike, week_start: str = "Sunday") -> list[str]:
        return days_in_grid(month_date, week_start)

    def search(self, query: str) -> SearchResult:
        return search(self.store, query)

    def export_month(self, month_date: DayLike, fmt: str, sink: ExportSink) -> Outcome:
        """Render a month's events and hand the file to the sink."""
        try:
            content = render(self.month_events(month_date), fmt)
        except CalendarError as e:
            return Outcome.failure(e)
        filename = export_filename(month_date, fmt)
        path = sink.offer(filename, content)
        return Outcome.success(path=path)


def get_blob_store(config: Config) -> FileBlobStore:
    """Resolve the blob store from config."""
    return FileBlobStore(config.resolved_data_dir())


def get_export_sink(config: Config, export_dir: str | None = None) -> DirectoryExportSink:
    """Resolve the export directory, preferring an explicit override."""
    if export_dir:
        return DirectoryExportSink(Path(export_dir))
    return DirectoryExportSink(config.resolved_export_dir())


def open_session(config: Config) -> Session:
    return Session.open(get_blob_store(config), key=config.storage_key)