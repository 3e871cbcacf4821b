"""In-memory blob storage adapter."""


class MemoryBlobStore:
    """Implements BlobStore protocol with a plain dict. Nothing survives the process."""

    def __init__(self, blobs: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(blobs or {})
        self.writes = 0

    def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    def write(self, key: str, content: str) -> None:
        self.blobs[key] = content
        self.writes += 1
