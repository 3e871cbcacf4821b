"""File-based blob storage adapter."""

import logging
import re
from pathlib import Path

from ..core.errors import MalformedDataError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileBlobStore:
    """
    File-based blob storage.

    Implements BlobStore protocol. Each key gets a JSON file in the data dir.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        if not _KEY_PATTERN.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        """Read blob content for a key. Returns None if not found."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDataError(f"{path} is not valid UTF-8: {e}") from e

    def write(self, key: str, content: str) -> None:
        """Write/overwrite blob content for a key."""
        path = self._path_for_key(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
        logger.debug(f"Wrote {len(content)} bytes to {path}")

    def exists(self, key: str) -> bool:
        return self._path_for_key(key).exists()
