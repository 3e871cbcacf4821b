"""Event records and day keys - no I/O dependencies."""

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from .errors import ValidationError
from .interval import TimeInterval, format_time, parse_time


class Category(str, Enum):
    """Closed set of event categories."""

    WORK = "Work"
    PERSONAL = "Personal"
    OTHERS = "Others"

    @classmethod
    def parse(cls, value: "str | Category | None") -> "Category":
        if value is None or value == "":
            return cls.WORK
        if isinstance(value, cls):
            return value
        for category in cls:
            if category.value.lower() == str(value).strip().lower():
                return category
        raise ValidationError(f"Unknown category: {value!r}")


def new_event_id() -> str:
    return uuid.uuid4().hex


def day_key(value: date | datetime | str) -> str:
    """
    Normalize a date to its canonical YYYY-MM-DD key.

    Datetimes contribute their local date only.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value).strip()).isoformat()
    except ValueError:
        raise ValidationError(f"Invalid day: {value!r}") from None


def parse_day(key: str) -> date:
    """Inverse of day_key for keys already normalized."""
    return date.fromisoformat(day_key(key))


@dataclass(frozen=True)
class EventRecord:
    """A single event on a calendar day."""

    id: str
    name: str
    interval: TimeInterval
    description: str = ""
    category: Category = Category.WORK

    @classmethod
    def create(
        cls,
        name: str,
        start: str | int,
        end: str | int,
        description: str = "",
        category: "str | Category | None" = None,
    ) -> "EventRecord":
        """Build a new event with a freshly issued id."""
        return cls(
            id=new_event_id(),
            name=name,
            interval=TimeInterval(parse_time(start), parse_time(end)),
            description=description or "",
            category=Category.parse(category),
        )

    @property
    def start_time(self) -> str:
        return format_time(self.interval.start)

    @property
    def end_time(self) -> str:
        return format_time(self.interval.end)

    def with_id(self, event_id: str) -> "EventRecord":
        return replace(self, id=event_id)

    def validate(self) -> None:
        """Raise ValidationError unless the event is fit to save."""
        if not self.name or not self.name.strip():
            raise ValidationError("Event name is required")
        if self.interval.is_degenerate():
            raise ValidationError(
                f"Event must end after it starts ({self.interval.format()})"
            )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "description": self.description,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EventRecord":
        """Create EventRecord from its persisted form."""
        if not isinstance(data, dict):
            raise ValidationError(f"Event must be an object, got {type(data).__name__}")
        try:
            start = data["startTime"]
            end = data["endTime"]
        except KeyError as e:
            raise ValidationError(f"Event is missing {e.args[0]}") from None
        return cls(
            id=data.get("id") or new_event_id(),
            name=str(data.get("name", "")),
            interval=TimeInterval(parse_time(start), parse_time(end)),
            description=data.get("description") or "",
            category=Category.parse(data.get("category")),
        )


@dataclass(frozen=True)
class DayEvent:
    """An event annotated with the day it belongs to."""

    day: str
    event: EventRecord
