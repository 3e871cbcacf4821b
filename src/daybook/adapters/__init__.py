"""Adapters - I/O implementations of ports."""

from .file_blob import FileBlobStore
from .memory_blob import MemoryBlobStore
from .file_export import DirectoryExportSink

__all__ = [
    "FileBlobStore",
    "MemoryBlobStore",
    "DirectoryExportSink",
]
