"""Blob storage interface."""

from typing import Protocol


class BlobStore(Protocol):
    """Interface for reading and writing a text blob under a fixed key."""

    def read(self, key: str) -> str | None:
        """
        Read the blob for a key. Returns None if nothing is stored.

        Raises MalformedDataError when the stored bytes are not text.
        """
        ...

    def write(self, key: str, content: str) -> None:
        """Write/overwrite the blob for a key."""
        ...
