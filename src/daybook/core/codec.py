"""Persisted form of the event store - no I/O dependencies."""

import json

from .export import from_json
from .store import DayStore


def encode_store(store: DayStore) -> str:
    """Serialize the whole store as {day: [event, ...]}."""
    return json.dumps(
        {day: [e.to_dict() for e in events] for day, events in store.snapshot().items()}
    )


def decode_store(text: str) -> DayStore:
    """
    Rebuild a store from its persisted form.

    Raises MalformedDataError for anything that is not a JSON object of
    day lists holding valid events. Stored events are trusted as-is and
    not re-checked for overlaps.
    """
    return DayStore(from_json(text))
