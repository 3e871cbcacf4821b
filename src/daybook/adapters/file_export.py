"""Directory-based export sink adapter."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryExportSink:
    """
    Writes export files into a directory.

    Implements ExportSink protocol. An existing file with the same name is
    overwritten.
    """

    def __init__(self, export_dir: Path | str):
        self.export_dir = Path(export_dir).expanduser()

    def offer(self, filename: str, content: str) -> Path:
        if Path(filename).name != filename:
            raise ValueError(f"Export filename must not contain a path: {filename!r}")
        self.export_dir.mkdir(parents=True, exist_ok=True)
        path = self.export_dir / filename
        path.write_text(content, encoding="utf-8")
        logger.info(f"Exported {filename} to {self.export_dir}")
        return path
