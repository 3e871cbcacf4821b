"""Functional core - pure business logic with no I/O."""

from .errors import (
    CalendarError,
    ConflictError,
    MalformedDataError,
    NotFoundError,
    ValidationError,
)
from .interval import TimeInterval, overlaps, parse_range, parse_time, format_time
from .events import Category, DayEvent, EventRecord, day_key
from .store import DayStore
from .month import Weekday, days_in_grid, events_in_month, month_bounds, shift_month
from .search import SearchResult, search
from .export import export_filename, from_json, to_csv, to_json
from .codec import decode_store, encode_store

__all__ = [
    # Errors
    "CalendarError",
    "ConflictError",
    "MalformedDataError",
    "NotFoundError",
    "ValidationError",
    # Intervals
    "TimeInterval",
    "overlaps",
    "parse_range",
    "parse_time",
    "format_time",
    # Events
    "Category",
    "DayEvent",
    "EventRecord",
    "day_key",
    # Store
    "DayStore",
    # Month
    "Weekday",
    "days_in_grid",
    "events_in_month",
    "month_bounds",
    "shift_month",
    # Search
    "SearchResult",
    "search",
    # Export
    "export_filename",
    "from_json",
    "to_csv",
    "to_json",
    # Persistence
    "decode_store",
    "encode_store",
]
