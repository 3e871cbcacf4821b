"""Calendar error taxonomy."""


class CalendarError(Exception):
    """Base class for every error the calendar core raises."""

    pass


class ValidationError(CalendarError):
    """Raised when an event, time or day key is not well formed."""

    pass


class ConflictError(CalendarError):
    """Raised when an event would overlap another event on the same day."""

    def __init__(self, day: str, conflicting):
        self.day = day
        self.conflicting = conflicting
        super().__init__(
            f"Event overlaps '{conflicting.name}' "
            f"({conflicting.interval.format()}) on {day}"
        )


class NotFoundError(CalendarError):
    """Raised when an edit or removal references a missing day or event."""

    def __init__(self, day: str, ref: str | int | None = None):
        self.day = day
        self.ref = ref
        if ref is None:
            message = f"No events on {day}"
        else:
            message = f"No event {ref!r} on {day}"
        super().__init__(message)


class MalformedDataError(CalendarError):
    """Raised when persisted calendar data cannot be decoded."""

    pass
