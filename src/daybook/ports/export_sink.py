"""Export sink interface."""

from pathlib import Path
from typing import Protocol


class ExportSink(Protocol):
    """Interface for handing an exported file to the user."""

    def offer(self, filename: str, content: str) -> Path:
        """Offer content as a downloadable file. Returns where it went."""
        ...
