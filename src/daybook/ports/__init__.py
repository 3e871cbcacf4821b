"""Ports - interfaces/protocols for external dependencies."""

from .blob_store import BlobStore
from .export_sink import ExportSink

__all__ = [
    "BlobStore",
    "ExportSink",
]
