"""Month export to JSON and CSV - no I/O dependencies."""

import csv
import io
import json
from collections.abc import Mapping
from datetime import date, datetime

from .errors import MalformedDataError, ValidationError
from .events import EventRecord, day_key
from .month import month_bounds

CSV_HEADER = ["Date", "Event Name", "Start Time", "End Time", "Description"]
EXPORT_FORMATS = ("json", "csv")

MonthEvents = Mapping[str, tuple[EventRecord, ...]]


def to_json(month_events: MonthEvents) -> str:
    """Pretty-printed JSON of {day: [event, ...]}, keeping input order."""
    return json.dumps(
        {day: [e.to_dict() for e in events] for day, events in month_events.items()},
        indent=2,
    )


def from_json(text: str) -> dict[str, tuple[EventRecord, ...]]:
    """Parse the output of to_json back into a day mapping."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDataError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedDataError("JSON is nested too deeply") from e
    if not isinstance(data, dict):
        raise MalformedDataError(f"Expected an object, got {type(data).__name__}")

    result = {}
    for day, items in data.items():
        if not isinstance(items, list):
            raise MalformedDataError(f"Events for {day!r} must be a list")
        try:
            key = day_key(day)
            events = tuple(EventRecord.from_dict(item) for item in items)
        except ValidationError as e:
            raise MalformedDataError(f"Bad entry for {day!r}: {e}") from e
        if key in result:
            raise MalformedDataError(f"Day {key} appears more than once")
        result[key] = events
    return result


def to_csv(month_events: MonthEvents) -> str:
    """
    One row per event under a fixed header.

    Fields holding a comma, quote or newline are quoted; everything else is
    written as-is. Rows are joined by newlines with no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for day, events in month_events.items():
        for event in events:
            writer.writerow(
                [day, event.name, event.start_time, event.end_time, event.description or ""]
            )
    return buffer.getvalue().removesuffix("\n")


def render(month_events: MonthEvents, fmt: str) -> str:
    match fmt.lower():
        case "json":
            return to_json(month_events)
        case "csv":
            return to_csv(month_events)
    raise ValidationError(f"Unsupported export format: {fmt!r}")


def export_filename(month_date: date | datetime | str, fmt: str) -> str:
    """File name offered for a month export, e.g. events-March-2024.csv."""
    first, _ = month_bounds(month_date)
    return f"events-{first.strftime('%B')}-{first.year}.{fmt.lower()}"
