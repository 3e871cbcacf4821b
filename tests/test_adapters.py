"""Tests for storage and export adapters."""

import pytest

from daybook.adapters.file_blob import FileBlobStore
from daybook.adapters.file_export import DirectoryExportSink
from daybook.adapters.memory_blob import MemoryBlobStore
from daybook.core.errors import MalformedDataError


class TestFileBlobStore:
    def test_creates_data_dir(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        FileBlobStore(data_dir)
        assert data_dir.is_dir()

    def test_read_missing(self, tmp_path):
        assert FileBlobStore(tmp_path).read("events") is None

    def test_write_then_read(self, tmp_path):
        blobs = FileBlobStore(tmp_path)
        blobs.write("events", '{"a": 1}')
        assert blobs.read("events") == '{"a": 1}'
        assert (tmp_path / "events.json").exists()
        assert blobs.exists("events") is True

    def test_overwrite_leaves_no_temp_file(self, tmp_path):
        blobs = FileBlobStore(tmp_path)
        blobs.write("events", "one")
        blobs.write("events", "two")
        assert blobs.read("events") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["events.json"]

    def test_expands_user_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        blobs = FileBlobStore("~/store")
        assert "~" not in str(blobs.data_dir)

    def test_read_non_utf8(self, tmp_path):
        (tmp_path / "events.json").write_bytes(b"\xff\xfe{")
        with pytest.raises(MalformedDataError, match="not valid UTF-8"):
            FileBlobStore(tmp_path).read("events")

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", ".hidden"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            FileBlobStore(tmp_path).read(key)


class TestMemoryBlobStore:
    def test_round_trip(self):
        blobs = MemoryBlobStore()
        assert blobs.read("events") is None
        blobs.write("events", "{}")
        assert blobs.read("events") == "{}"
        assert blobs.writes == 1

    def test_seeded(self):
        assert MemoryBlobStore({"events": "x"}).read("events") == "x"


class TestDirectoryExportSink:
    def test_writes_file(self, tmp_path):
        sink = DirectoryExportSink(tmp_path / "exports")
        path = sink.offer("events-March-2024.csv", "Date\n")
        assert path == tmp_path / "exports" / "events-March-2024.csv"
        assert path.read_text() == "Date\n"

    def test_rejects_paths(self, tmp_path):
        with pytest.raises(ValueError):
            DirectoryExportSink(tmp_path).offer("../out.csv", "")
